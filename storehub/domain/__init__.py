from .models import MAX_QUANTITY, Account, Claims, Item, Store  # noqa
