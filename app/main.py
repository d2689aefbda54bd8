import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.routes import router
from app.database.sanity_store import get_order_store
from config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up application...")
    store = get_order_store()
    await store.init_client()
    yield
    # Shutdown
    logger.info("Shutting down application...")
    await store.close()

app = FastAPI(title="Checkout", lifespan=lifespan)
app.include_router(router)

@app.get("/")
def read_root():
    return {
        "message": "Checkout service",
        "store": settings.ORDER_STORE,
    }
