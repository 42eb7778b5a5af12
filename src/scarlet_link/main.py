from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from scarlet_link import __version__, config
from scarlet_link.i18n.translator import OpenAIBatchTranslator
from scarlet_link.routers import translation_router, websocket_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared batch translator on startup and close it on shutdown"""
    app.state.translator = OpenAIBatchTranslator()
    if not config.OPENAI_API_KEY:
        print("⚠️ OPENAI_API_KEY not set, translation requests will fail")
    print(f"✅ Translator ready (model={config.TRANSLATION_MODEL})")

    yield

    print("🔌 Shutting down...")
    await app.state.translator.close()


app = FastAPI(
    title="Scarlet Link i18n",
    description="Translation service for the Scarlet Link dashboard",
    version=__version__,
    lifespan=lifespan,
)

# Security headers for production only
if config.ENVIRONMENT == "production":
    from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
    from starlette.middleware.base import BaseHTTPMiddleware

    class SecurityHeadersMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request, call_next):
            response = await call_next(request)
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            return response

    app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Scarlet Link i18n",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "languages": "/api/i18n/languages",
            "translate": "/api/i18n/translate",
            "session": "/ws/i18n",
        },
    }


# Include routers
app.include_router(
    translation_router,
    prefix="/api/i18n",
    tags=["i18n"],
)

app.include_router(
    websocket_router,
    prefix="/ws",
    tags=["websocket"],
)


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "Scarlet Link i18n"}
