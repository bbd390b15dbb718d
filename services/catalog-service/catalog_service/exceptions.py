from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class CatalogError(HTTPException):
    kind = "catalog_error"

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class ValidationFailure(CatalogError):
    kind = "validation_failure"

    def __init__(self, detail: str = "Record does not match the entity shape"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class NotFound(CatalogError):
    kind = "not_found"

    def __init__(self, detail: str = "Object not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ExerciseNotFound(NotFound):
    def __init__(self, exercise_id: str):
        super().__init__(detail=f"Exercise with id={exercise_id} not found")


class VariantNotFound(NotFound):
    def __init__(self, variant_id: str):
        super().__init__(detail=f"Variant with id={variant_id} not found")


class StoreFault(CatalogError):
    kind = "store_fault"

    def __init__(self, detail: str = "Catalog store failure"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": exc.kind},
    )
