from fastapi import HTTPException, status


class VendorConnectException(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(VendorConnectException):
    def __init__(self, resource: str, resource_id: str | None = None):
        detail = f"{resource} not found"
        if resource_id:
            detail = f"{resource} '{resource_id}' not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class PermissionDeniedError(VendorConnectException):
    def __init__(self, detail: str = "You do not have permission to perform this action"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class BadRequestError(VendorConnectException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class ConflictError(VendorConnectException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_409_CONFLICT)


# ---------- Catalog domain errors ----------


class SpecificationError(ValueError):
    """A resource specification map is malformed.

    Raised for blank or duplicate item names and for quantities that are
    zero, negative or not whole numbers. Subclasses ``ValueError`` so that
    pydantic reports it as an ordinary validation failure.
    """


class DivisionHazardError(ArithmeticError):
    """A cost split was attempted over zero line items."""
