"""Business logic for students, subjects, questions and test templates, and workbook reading."""