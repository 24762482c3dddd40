"""HTTP API: Flask blueprints, CORS and token middleware, and the application factory."""