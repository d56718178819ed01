"""Remote execution collaborators."""

from .ssh import Executor, SSHExecutor, connect_kwargs

__all__ = ["Executor", "SSHExecutor", "connect_kwargs"]
