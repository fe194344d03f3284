"""Exceptions raised by CatalogSmith."""


class CatalogSmithError(Exception):
    """Base class for all CatalogSmith errors."""

    pass


class EmptySheetError(CatalogSmithError):
    """Raised when an uploaded sheet has no detectable columns."""

    def __init__(self, message: str = "No columns detected in sheet."):
        super().__init__(message)


class UnsupportedSheetFormatError(CatalogSmithError):
    """Raised when an uploaded file is neither CSV nor XLSX."""

    pass


class UnknownHeaderError(CatalogSmithError):
    """Raised when a mapping override names a header that does not exist."""

    pass


class UnknownMarketplaceError(CatalogSmithError):
    """Raised when a marketplace outside the supported set is selected."""

    pass


class SheetsNotLoadedError(CatalogSmithError):
    """Raised when a catalog operation needs both template and raw sheets."""

    pass


class GatewayError(CatalogSmithError):
    """Raised when the model provider fails (transport or provider error)."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider} gateway error: {message}")
