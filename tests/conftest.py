import pytest

from duckduckgone.storage import ConfigStore


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / ".ddg.conf")


@pytest.fixture
def ready_store(store):
    store.config_file.write_text(
        "api = A\nclipboard = yes\nddggen = yes\nsetupcomplete = true\n"
    )
    return store


class ScriptedPrompt:
    """Stands in for input(), answering from a list"""

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def scripted():
    return ScriptedPrompt
