from pathlib import Path
import pytest
from parrot.engine import Engine
from parrot.rng import StepRandomSource
import parrot_web.web as webmod

@pytest.fixture
def web_engine(tmp_path: Path):
    """Engine wired into the Flask app, seeded with a tiny dictionary."""
    eng = Engine(rng=StepRandomSource(0, 1))
    eng.load(str(tmp_path / "web.json"))
    eng.learn("Crabs are great. There are many crabs.")
    webmod._engine = eng
    try:
        yield eng
    finally:
        webmod._engine = None
        eng.shutdown()

@pytest.fixture
def client(web_engine):
    return webmod.app.test_client()
