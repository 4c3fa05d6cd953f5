from fastapi import APIRouter
from db_explorer.api.endpoints import pages, tables, query

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(pages.router)
api_router.include_router(tables.router)
api_router.include_router(query.router)
