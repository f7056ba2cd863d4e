"""API route modules."""
from studentix.routes import auth, content, courses, quizzes, reports, users

__all__ = ["auth", "content", "courses", "quizzes", "reports", "users"]
