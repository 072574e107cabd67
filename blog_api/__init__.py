from blog_api.main import app

__all__ = ["app"]
