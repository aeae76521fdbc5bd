from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from lotto_admin.core.config import settings
from lotto_admin.core.logging_config import configure_logging
from lotto_admin.api.v1.router import api_router

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Winnings and payout reports for the lotto admin console",
    version="1.0.0"
)

# The admin SPA is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root():
    return {
        "status": "online",
        "message": "Lotto Admin Reporting API",
        "version": "1.0.0"
    }
