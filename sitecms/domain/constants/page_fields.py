"""Constants for MenuItem and PageContent field names"""


class MenuItemFields:
    """Field name constants for MenuItem model"""
    ID = "_id"
    TEXT = "text"
    URL = "url"
    POSITION = "position"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class PageContentFields:
    """Field name constants for PageContent model"""
    ID = "_id"
    MENU_ITEM_ID = "menu_item_id"
    CONTENT = "content"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
