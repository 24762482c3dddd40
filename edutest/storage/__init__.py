"""SQLite database access: connection, schema and repositories."""