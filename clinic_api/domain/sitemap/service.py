"""Sitemap generation"""

from dataclasses import dataclass
from datetime import date, datetime
from html import escape
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Post


@dataclass
class StaticPage:
    loc: str
    priority: str


STATIC_PAGES = [
    StaticPage("/", "1.00"),
    StaticPage("/servicios", "0.80"),
    StaticPage("/promociones", "0.80"),
    StaticPage("/tecnologia", "0.80"),
    StaticPage("/alquiler", "0.80"),
    StaticPage("/blog", "0.90"),
    StaticPage("/testimonios", "0.80"),
    StaticPage("/ubicaciones", "0.80"),
    StaticPage("/contacto", "0.80"),
]


def published_posts(db: Session) -> list[Post]:
    return db.query(Post).filter(Post.is_published.is_(True)).order_by(Post.created_at).all()


def _url_entry(loc: str, lastmod: str, priority: str, changefreq: str) -> str:
    return f"""  <url>
    <loc>{escape(loc)}</loc>
    <lastmod>{lastmod}</lastmod>
    <priority>{priority}</priority>
    <changefreq>{changefreq}</changefreq>
  </url>"""


def generate_sitemap(base_url: str, posts: list[Post], today: Optional[date] = None) -> str:
    base_url = base_url.rstrip("/")
    today_str = (today or date.today()).isoformat()

    entries = [
        _url_entry(f"{base_url}{page.loc}", today_str, page.priority, "weekly")
        for page in STATIC_PAGES
    ]
    for post in posts:
        created = post.created_at if isinstance(post.created_at, datetime) else None
        lastmod = created.date().isoformat() if created else today_str
        entries.append(_url_entry(f"{base_url}/blog/{post.slug}", lastmod, "0.90", "monthly"))

    body = "\n".join(entries)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{body}
</urlset>"""
