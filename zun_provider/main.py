import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from zun_provider.api.v1.node import router as node_router
from zun_provider.api.v1.pods import router as pods_router
from zun_provider.config import load_provider_config
from zun_provider.providers import create_provider

load_dotenv()


# Define a filter to exclude /health endpoint from logs
class HealthCheckFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return "GET /health" not in record.getMessage()


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    app.state.provider_config = None
    app.state.provider = None
    try:
        config = load_provider_config()
        app.state.provider_config = config
        app.state.provider = create_provider(config)
        logger.info(f"Provider {config.provider} ready for node {config.node_name}.")
    except Exception as e:
        logger.error(f"Failed to initialize provider: {e}", exc_info=True)
    yield
    # Shutdown logic
    zun_client = getattr(app.state.provider, "zun_client", None)
    if zun_client is not None:
        zun_client.close()


app = FastAPI(lifespan=lifespan)


@app.get("/health")
def read_health():
    provider_ready = getattr(app.state, "provider", None) is not None
    return {"status": "ok" if provider_ready else "degraded", "provider": provider_ready}


app.include_router(pods_router, prefix="/api/v1")
app.include_router(node_router, prefix="/api/v1")
