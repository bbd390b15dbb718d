from fastapi import APIRouter

router = APIRouter(prefix="")


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
