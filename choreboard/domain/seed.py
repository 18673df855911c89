from choreboard.config import DEFAULT_CATEGORIES, DEFAULT_CHILDREN
from choreboard.schemas.board import BoardData, Category, Child


def default_board() -> BoardData:
    """Starting roster used when no board document exists yet."""
    children = [Child(**child) for child in DEFAULT_CHILDREN]
    categories = [Category(**category) for category in DEFAULT_CATEGORIES]
    return BoardData(children=children, categories=categories)
