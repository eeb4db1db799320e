# main.py (project root)
from fastapi import FastAPI
import uvicorn
from app.core.config import settings
from app.db.mongodb import connect_to_mongo, close_mongo_connection
from app.endpoints import catalog_endpoints, health_endpoint
from app.utiles.response import register_exception_handlers, send_response

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

register_exception_handlers(app)

for router in catalog_endpoints.routers:
    app.include_router(router, prefix=settings.API_PREFIX)
app.include_router(health_endpoint.router, prefix=settings.API_PREFIX)


@app.on_event("startup")
async def startup():
    await connect_to_mongo()


@app.on_event("shutdown")
async def shutdown():
    await close_mongo_connection()


@app.get("/")
async def root():
    return send_response(200, f"{settings.APP_NAME} running", {"version": settings.APP_VERSION})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.APP_ENV == "development")
