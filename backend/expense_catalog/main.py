from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.logging import configure_logging
from .exceptions import CategoryError
from .routers import auth, expense_categories, admin_global_categories

configure_logging()

app = FastAPI(
    title="Expense Catalog API",
    description="Tenant and global expense categories for the multi-company ERP",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(expense_categories.router)
app.include_router(admin_global_categories.router)


@app.exception_handler(CategoryError)
async def category_error_handler(request: Request, exc: CategoryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "Expense Catalog API is running"}

@app.get("/")
async def root():
    return {"message": "Welcome to Expense Catalog API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("expense_catalog.main:app", host="0.0.0.0", port=8000, reload=True)
