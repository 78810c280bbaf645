from typing import List, Optional


class ProductServiceException(Exception):
    """
    Base for every error the API reports to the caller.
    The envelope fields (error, message, details) are rendered as-is by the
    exception handler registered in main.py.
    """

    status_code = 500
    error = "Error interno del servidor"

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ProductValidationError(ProductServiceException):
    status_code = 400
    error = "Datos de entrada inválidos"

    def __init__(self, details: List[str]):
        super().__init__("Por favor, corrija los siguientes errores:", details=details)


class InvalidProductId(ProductServiceException):
    status_code = 400
    error = "ID inválido"

    def __init__(self):
        super().__init__("El ID debe ser un número entero positivo")


class ProductNotFound(ProductServiceException):
    status_code = 404
    error = "Producto no encontrado"


class DuplicateBarcode(ProductServiceException):
    status_code = 400
    error = "Código de barras duplicado"

    def __init__(self, barcode: str, other: bool = False):
        who = "otro producto" if other else "un producto"
        super().__init__(f"Ya existe {who} con el código de barras {barcode}")
        self.barcode = barcode


class StoreError(ProductServiceException):
    status_code = 500
    error = "Error del almacén de datos"
