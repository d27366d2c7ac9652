from .pages import ARTICLE_TITLE, PARAGRAPHS, article_page

__all__ = ["ARTICLE_TITLE", "PARAGRAPHS", "article_page"]
