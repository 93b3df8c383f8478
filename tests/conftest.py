import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, 
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import app.core.database
app.core.database.engine = test_engine
app.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from app.core.database import Base, get_db
from app.core.context import RequestContext
from app.main import app
from app.services.notifier import Notifier, get_notifier
from app.store.memory import InMemoryStore
from app.store.sql import SqlStore

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    # Nettoie avant le test
    Base.metadata.drop_all(bind=test_engine)
    # Crée les tables
    Base.metadata.create_all(bind=test_engine)
    yield
    # Nettoie après le test
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def notifier():
    """Notifier isolé, branché à la place de celui du process"""
    fresh = Notifier(max_pending=10)
    app.dependency_overrides[get_notifier] = lambda: fresh
    yield fresh
    app.dependency_overrides.pop(get_notifier, None)


@pytest.fixture
def client(notifier):
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def sql_store(db):
    return SqlStore(db)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def ctx(memory_store, notifier):
    """Contexte de requête anonyme sur un store en mémoire"""
    return RequestContext(store=memory_store, notifier=notifier)


@pytest.fixture
def gql(client):
    """Exécute une opération GraphQL et retourne le JSON"""
    def execute(query, variables=None, token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = client.post("/graphql", json={"query": query, "variables": variables or {}}, headers=headers)
        assert response.status_code == 200
        return response.json()
    return execute


@pytest.fixture
def auth_token(gql):
    """Crée un utilisateur et retourne son token JWT"""
    result = gql(
        """
        mutation {
            signup(email: "test@example.com", password: "pass123", name: "Test User") { token }
        }
        """
    )
    return result["data"]["signup"]["token"]
