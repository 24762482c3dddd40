[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edutest"
version = "0.1.0"
description = "Test administration service: students, subjects, question banks, printable test templates and automatic answer checking."
requires-python = ">=3.10"
keywords = ["education", "testing", "exam", "quiz", "flask", "pdf", "grading", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Testing",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "flask",
    "pyjwt",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
edutest = "edutest.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["edutest"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
