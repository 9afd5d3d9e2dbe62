"""
FastAPI dependencies.

The engine and session factory are built once in create_app() and kept on
app.state; routes receive them through these dependencies instead of
importing a module-level pool.
"""
from fastapi import Request
from sqlalchemy.orm import sessionmaker


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.session_factory
