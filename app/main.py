import logging
from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter
from app.core.config import settings
from app.core.database import engine, Base
from app.graphql.context import get_context
from app.graphql.schema import schema
from app.routers import health

# Import des modèles pour que create_all connaisse les tables
from app.models import user, link, comment  # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="HackerNews GraphQL API",
    version="0.4.0"
)

graphql_app = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.GRAPHIQL else None
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(graphql_app, prefix="/graphql")
