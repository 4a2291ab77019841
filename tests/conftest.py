import pytest
from langchain_core.messages import AIMessage

from api.features.chat.generator import ReplyGenerator
from api.features.chat.repository import ConversationRepository
from api.shared.entities.registry import BaseEntity
from infra.resources import DatabaseResource


class ScriptedChatModel:
    """Stands in for a LangChain chat model and replays queued outcomes.

    Each outcome is either reply text or an exception to raise. The last
    outcome repeats once the queue is down to one.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or ["Happy to help!"]
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return AIMessage(content=outcome)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'chat.db'}"


@pytest.fixture
async def database(database_url):
    db = DatabaseResource(database_url=database_url)
    await db.init()
    await db.create_schema(BaseEntity.metadata)
    yield db
    await db.shutdown()


@pytest.fixture
def repository(database):
    return ConversationRepository(database=database)


@pytest.fixture
def scripted_model():
    return ScriptedChatModel


@pytest.fixture
def make_generator():
    def _make(model, **kwargs):
        return ReplyGenerator(llm=model, **kwargs)

    return _make
