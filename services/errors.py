"""Lookup and ownership failures raised by the layout services."""


class OwnerHasNoShopError(LookupError):
    def __init__(self, owner_id: str):
        self.owner_id = owner_id
        super().__init__(f"Owner {owner_id} has no shop")


class ShopNotFoundError(LookupError):
    def __init__(self, shop_id: str):
        self.shop_id = shop_id
        super().__init__(f"Shop {shop_id} not found")


class PageNotFoundError(LookupError):
    def __init__(self, shop_id: str, category: str):
        self.shop_id = shop_id
        self.category = category
        super().__init__(f"Page '{category}' not found for shop {shop_id}")


class ShopAlreadyExistsError(ValueError):
    def __init__(self, owner_id: str):
        self.owner_id = owner_id
        super().__init__(f"Owner {owner_id} already has a shop")
