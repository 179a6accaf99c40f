# app/domain/errors.py


class StorefrontError(Exception):
    """Bazowy wyjatek domeny sklepu."""


class NetworkFailure(StorefrontError):
    """Product API nieosiagalne albo odpowiedz z kodem != 2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseFailure(StorefrontError):
    """Zly ksztalt danych (zapisany koszyk albo odpowiedz API)."""


class NotFound(StorefrontError):
    """Pojedynczy produkt nie istnieje."""

    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class StaleResponse(StorefrontError):
    """Wynik nadpisany przez nowsze zapytanie albo zmiane koszyka - do odrzucenia."""

    def __init__(self, message: str, generation: int):
        super().__init__(message)
        self.generation = generation
