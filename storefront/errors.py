"""
Error taxonomy shared by the services. Each error knows the HTTP status
it maps to and renders as a plain-text body.
"""


class StorefrontError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def description(self):
        return str(self)


class InvalidRequest(StorefrontError):
    status_code = 400
    message = "Invalid request body"


class UserNotFound(StorefrontError):
    status_code = 400
    message = "User not found"


class ProductNotFound(StorefrontError):
    status_code = 400

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class ResourceNotFound(StorefrontError):
    status_code = 404
    message = "Not found"


class OrderNotFound(ResourceNotFound):
    message = "Order not found"
