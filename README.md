# edutest

A small web service for running paper-based tests.

It keeps a register of students, subjects and a question bank in an SQLite
database, builds a personal test template for each student (two subjects, up
to 30 randomly drawn questions each, with the answer options shuffled),
renders the template as a PDF, and checks a student's answer sheet against
the stored answer key.

## Features

- Students, subjects and questions, with bulk import from `.xlsx` workbooks
  (first sheet, first row is a header). Rows that are incomplete or refer to
  an unknown subject id are reported back instead of being stored.
- Test templates: questions are drawn at random per subject, options are
  shuffled, and the answer key (question number to letter) is saved with the
  template.
- A PDF of each template (A4, Helvetica; characters outside the Windows-1252
  range are printed as `?`).
- Answer checking: counts of correct and incorrect answers, a percentage
  rounded up to two decimals, and a point score stored with the result
  (3.1 points per correct answer to questions 1–30, 2.1 to questions 31–60).
- A JSON HTTP API built on Flask, with CORS headers on every response.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
edutest
```

opens (and if needed creates) the database and serves the API with Flask's
built-in server. Options:

| Option | Default | Meaning |
| ------ | ------- | ------- |
| `--db` | `edutest.db` | SQLite database file |
| `--log-file` | `app.log` | log file, one JSON object per line |
| `--pdf-dir` | `storage/pdfs` | where template PDFs are written and read |
| `--upload-dir` | `.` | where uploaded workbooks and images are saved |
| `--host` | `127.0.0.1` | address to listen on |
| `--port` | `8080` | port to listen on |

## Using it from Python

```python
from edutest.logs import init_logger
from edutest.storage.storage import open_storage
from edutest.service.core import build_service
from edutest.api.router import create_app

logger = init_logger("app.log")
storage = open_storage("edutest.db", logger)
service = build_service(storage, logger, "storage/pdfs")
app = create_app(service, logger, "uploads")
app.run()
```

`build_service` returns a `Service` with `subjects`, `students`, `questions`
and `templates` members (`SubjectService`, `StudentService`,
`QuestionService`, `TemplateService`); they can be used directly without the
web layer, for example `service.templates.create(student_id, day)` or
`service.templates.check(student_id, day, answers)`.

### Authentication

`create_app` does not require authentication. `edutest.api.middleware`
provides `auth_required(jwt_key)`, a before-request hook that rejects
requests without a valid HS256/HS384/HS512 token in the `Authorization`
header (with or without the `Bearer` scheme) and stores the token's
`items.user_id` in `flask.g.user_id`:

```python
from edutest.api.middleware import auth_required

app.before_request(auth_required("secret"))
```

## HTTP API

| Method | Path | Purpose |
| ------ | ---- | ------- |
| POST | `/students/create` | register a student; returns the new `student_id` (numbers start at 200001) |
| PUT | `/students/update/<id>` | update a student |
| DELETE | `/students/delete/<id>` | delete a student |
| GET | `/students` | list students, or one with `?id=` |
| GET | `/students/<student_id>/result` | a student's results, optionally `?template_id=` |
| GET | `/students/results` | results filtered by `day`, `subject1_id`, `subject2_id` |
| POST | `/students/upload` | import students from a workbook (form field `file`) |
| POST | `/subjects/create` | add a subject |
| DELETE | `/subjects/update/<id>` | rename a subject to `?name=` |
| GET | `/subjects/get` | list subjects, or one with `?id=` |
| POST | `/questions/create` | add a question |
| PUT | `/questions/update/<id>` | update a question |
| DELETE | `/questions/delete/<id>` | delete a question |
| GET | `/questions` | list questions by `id`, `subject_id`, `type` |
| POST | `/questions/upload` | import questions from a workbook (form field `file`) |
| POST | `/questions/image/upload` | save an image (form field `image`) under `images/` in the upload directory; returns its path |
| POST | `/templates/create` | build a template for `student_id` and `day` |
| POST | `/templates/check` | check `answers` (`number`, `answer`) for `student_id` and `day` |
| GET | `/templates/get` | download a template PDF by `student_id` and `day` |

Error responses carry a JSON body with `message` and `error` fields.

### Workbook columns

Students: number, name, lastname, phone number, subject1 id, subject2 id.

Questions: number, subject id, question text, question image, option A,
option A image, option B, option B image, option C, option C image, option D,
option D image, answer, type. The answer is the text of the correct option.

## What it does not do

- There are no user accounts: no registration, login or token-refresh
  endpoints. Tokens checked by `auth_required` must be issued elsewhere.
- Uploaded images are only saved to disk; nothing serves them back over HTTP.
- Storage is a local SQLite file only.