"""Shared fixtures: small record sets and scripted console I/O."""

import pytest

from coda.models import Header, Record


LABELS = ("pruid", "prname", "prnameFR", "date", "numconf",
          "numprob", "numdeaths", "numtotal", "numtoday", "ratetotal")


def make_record(pruid=35, prname="Ontario", prname_fr="Ontario", date="2020-03-01",
                numconf=0, numprob=0, numdeaths=0, numtotal=0, numtoday=0, ratetotal=0.0):
    return Record(pruid, prname, prname_fr, date, numconf, numprob,
                  numdeaths, numtotal, numtoday, ratetotal)


class ScriptedConsole:
    """Feeds canned answers to `read` and records everything written."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []
        self.output = []

    def read(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def write(self, text=""):
        self.output.append(text)

    @property
    def text(self):
        return "\n".join(self.output)


@pytest.fixture
def header():
    return Header(LABELS)


@pytest.fixture
def provinces():
    """Three rows with confirmed counts 10, 5, 20."""
    return [
        make_record(pruid=35, prname="Ontario", prname_fr="Ontario", date="2020-03-02", numconf=10),
        make_record(pruid=24, prname="Quebec", prname_fr="Québec", date="2020-03-01", numconf=5),
        make_record(pruid=59, prname="British Columbia", prname_fr="Colombie-Britannique",
                    date="2020-03-03", numconf=20),
    ]


@pytest.fixture
def console_factory():
    return ScriptedConsole


@pytest.fixture
def record_factory():
    return make_record
