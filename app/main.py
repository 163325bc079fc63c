from fastapi import FastAPI, Request
from app.core.config import settings
from app.api import reservations
from app.api.reservations import error_response
from app.core.errors import ReservationError, UnexpectedError
from app.core.logger import setup_logging, logger
from app.services.store import build_store
from app.services.reservation_service import ReservationService
from app.services.query_service import QueryService
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Starting Reservation Intake Backend")
    store = build_store(settings)
    await store.ensure_schema()
    logger.info(f"📚 Using '{store.name}' reservation store")

    app.state.store = store
    app.state.reservation_service = ReservationService(store)
    app.state.query_service = QueryService(store)
    yield
    # Shutdown
    logger.info("🛑 Shutting down backend")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan
)

@app.exception_handler(ReservationError)
async def reservation_exception_handler(request: Request, exc: ReservationError):
    return error_response(exc)

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"🔥 UNHANDLED ERROR: {str(exc)}")
    return error_response(UnexpectedError(str(exc) or "An unexpected error occurred"))

app.include_router(reservations.router, prefix=settings.API_PREFIX, tags=["Reservations"])

@app.get("/")
async def health_check():
    return {'status': 'active', 'time': datetime.now().isoformat()}

@app.get("/health")
async def health_check_std(request: Request):
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "store": request.app.state.store.name,
        "timestamp": datetime.now().isoformat(),
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
