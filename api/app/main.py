"""FastAPI app with Strawberry GraphQL."""

import logging

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from app.schema import schema
from scenariocalc import __version__
from scenariocalc.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Scenario Pricing API", version=__version__)
graphql_app = GraphQLRouter(schema)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancers and Docker."""
    return {"status": "ok"}
