"""Constants for Order model field names"""


class OrderFields:
    """Field name constants for Order model"""
    ID = "_id"
    CUSTOMER_FIRST_NAME = "customer_first_name"
    CUSTOMER_LAST_NAME = "customer_last_name"
    CUSTOMER_EMAIL = "customer_email"
    CUSTOMER_PHONE = "customer_phone"
    ITEMS = "items"
    TOTAL_PRICE = "total_price"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # Embedded order item
    ITEM_PRODUCT_ID = "product_id"
    ITEM_PRODUCT_NAME = "product_name"
    ITEM_QUANTITY = "quantity"
    ITEM_UNIT_PRICE = "unit_price"
