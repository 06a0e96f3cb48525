"""StoreHub - 계정/스토어/아이템 재고 관리 백엔드."""

__version__ = "0.1"
