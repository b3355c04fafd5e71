"""Business logic. Services take a SQLAlchemy session per call and raise app.exceptions errors."""
