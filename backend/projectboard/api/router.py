from fastapi import APIRouter
from projectboard.api.routers import auth, admin, projects, work_packages, single_view

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(projects.router, prefix="/api/v3/projects", tags=["projects"])
api_router.include_router(work_packages.router, prefix="/api/v3/work_packages", tags=["work_packages"])
api_router.include_router(single_view.router, tags=["single_view"])
