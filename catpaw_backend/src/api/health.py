from fastapi import APIRouter, Request

router = APIRouter()


# PUBLIC_INTERFACE
@router.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Reports that the dev server is up and how many sites the assembled configuration holds.",
)
def health_check(request: Request):
    """Return status plus the configured site count."""
    sites = request.app.state.catpaw_config.get("sites", {}).get("list", [])
    return {"status": "ok", "sites": len(sites)}
