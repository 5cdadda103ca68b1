from fastapi import FastAPI
import logging
from freightdesk.core.config import settings
from freightdesk.core.middleware import AuditMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.PROJECT_NAME)

# Audit Middleware
app.add_middleware(AuditMiddleware)

from freightdesk.api import (
    bookings,
    dashboard,
    disputes,
    exceptions,
    invoices,
    notifications,
    payments,
    quote_approvals,
    quotes,
    rate_requests,
    rates,
    system,
    tracking,
    vendor_orders,
    vendors,
    web,
)

app.include_router(system.router)
app.include_router(web.router)

# Approvals before quotes so /quotes/approvals is not read as a quote id
for module in (
    quote_approvals,
    quotes,
    rates,
    rate_requests,
    bookings,
    invoices,
    payments,
    disputes,
    vendors,
    vendor_orders,
    exceptions,
    notifications,
    tracking,
    dashboard,
):
    app.include_router(module.router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
