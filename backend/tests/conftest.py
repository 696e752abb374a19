"""
Point the app at a throwaway SQLite database and an in-memory mailer.
Runs before any test module imports workout_api.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="workout-api-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SMTP_HOST"] = ""

import pytest

from workout_api.db import Base, engine
from workout_api import models  # noqa: F401  # registers every table
from workout_api.errors import NotificationError
from workout_api.main import app
from workout_api.notifications import get_mailer
from seed_exercises import DEFAULT_EXERCISES, seed


class OutboxMailer:
    """Keeps confirmation mails instead of sending them."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send_confirmation(self, recipient, first_name, link):
        if self.fail:
            raise NotificationError("smtp relay unavailable")
        self.sent.append({"to": recipient, "first_name": first_name, "link": link})

    def token_for(self, recipient):
        for mail in reversed(self.sent):
            if mail["to"].lower() == recipient.lower():
                return mail["link"].rsplit("/", 1)[1]
        raise LookupError(recipient)


outbox = OutboxMailer()
app.dependency_overrides[get_mailer] = lambda: outbox

Base.metadata.create_all(engine)
seed(DEFAULT_EXERCISES)


@pytest.fixture
def mailer():
    outbox.fail = False
    yield outbox
    outbox.fail = False
