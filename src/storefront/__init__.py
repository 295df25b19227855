"""Storefront: accounts, catalogue, cart, coupons and checkout on Protean."""
