from fastapi import FastAPI

from dashboard.api.customers import router as customers_router
from dashboard.api.invoices import router as invoices_router
from dashboard.logging import configure_logging

configure_logging()

app = FastAPI(
    title="Invoice Dashboard API",
    version="0.1.0",
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(customers_router)
app.include_router(invoices_router)
