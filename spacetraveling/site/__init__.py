"""Static HTML site generation."""

from .build import SiteReport, build_site, render_post_page

__all__ = ["SiteReport", "build_site", "render_post_page"]
