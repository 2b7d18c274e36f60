"""Rota API: users, samples and shift scheduling over FastAPI + SQLAlchemy."""
