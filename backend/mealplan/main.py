from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealplan.config import get_settings
from mealplan.errors import GroceryError
from mealplan.logging_config import init_logging
from mealplan.routers import grocery, meal_plans, recipes

settings = get_settings()
init_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Meal Plan API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Build allowed origins list (supports comma-separated FRONTEND_URL for multiple domains)
_origins = ["http://localhost:3000"]
for origin in settings.FRONTEND_URL.split(","):
    origin = origin.strip()
    if origin and origin not in _origins:
        _origins.append(origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GroceryError)
def grocery_error_handler(request: Request, exc: GroceryError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


app.include_router(recipes.router, prefix="/api/v1/recipes", tags=["Recipes"])
app.include_router(meal_plans.router, prefix="/api/v1/meal-plans", tags=["Meal Plans"])
app.include_router(grocery.router, prefix="/api/v1/grocery", tags=["Grocery"])


@app.get("/health")
def health():
    return {"status": "ok"}
