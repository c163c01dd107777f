"""
Todo API Client - Session Storage

Where the client keeps the token it got at login. The file store survives
between CLI invocations; the memory store is for tests and embedding.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".todo_api" / "session.json"


@dataclass(frozen=True)
class Session:
    """A logged-in session: the bearer token and who it belongs to."""

    token: str
    username: str


class TokenStore(ABC):
    @abstractmethod
    def load(self) -> Optional[Session]:
        pass

    @abstractmethod
    def save(self, session: Session) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemoryTokenStore(TokenStore):
    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def load(self) -> Optional[Session]:
        return self._session

    def save(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenStore(TokenStore):
    """JSON file holding the current session, readable only by its owner."""

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            path = Path(os.getenv("TODO_SESSION_FILE", str(DEFAULT_SESSION_FILE)))
        self.path = Path(path)

    def load(self) -> Optional[Session]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

        token = data.get("token") if isinstance(data, dict) else None
        username = data.get("username") if isinstance(data, dict) else None
        if not token or not username:
            return None
        return Session(token=token, username=username)

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only from creation; chmod covers a file left by an older version
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(asdict(session), f)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
