import html
from typing import Iterable, Optional

from app.schemas.blog import PostSummary, PostView
from app.utils import format_publication_date

LOAD_MORE_LABEL = "Carregar mais posts"
FALLBACK_MESSAGE = "Carregando..."


def _escape(value: Optional[str]) -> str:
    return html.escape(value or "")


def _document(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="pt-BR">\n'
        "<head>\n"
        '<meta charset="utf-8" />\n'
        f"<title>{_escape(title)}</title>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def render_post_card(post: PostSummary) -> str:
    return (
        f'<a href="/post/{_escape(post.uid)}">'
        '<div class="postContainer">'
        f'<h1 class="title">{_escape(post.data.title)}</h1>'
        f'<h2 class="subtitle">{_escape(post.data.subtitle)}</h2>'
        '<div class="postContent">'
        f'<span class="publicationInformation calendar">{_escape(format_publication_date(post.first_publication_date))}</span>'
        f'<span class="publicationInformation user">{_escape(post.data.author)}</span>'
        "</div></div></a>"
    )


def render_home(
    posts: Iterable[PostSummary], site_name: str, load_more_href: Optional[str] = None
) -> str:
    """Listing page; the load-more control is only present while more pages exist."""
    cards = "\n".join(render_post_card(post) for post in posts)
    load_more = (
        f'<a class="loadMoreButton" href="{_escape(load_more_href)}">{LOAD_MORE_LABEL}</a>'
        if load_more_href
        else ""
    )
    body = f'<main class="contentContainer">\n{cards}\n{load_more}\n</main>'
    return _document(f"Início | {site_name}", body)


def render_post(view: PostView, site_name: str) -> str:
    data = view.post.data
    sections = "\n".join(
        # section bodies are already rendered markup
        f"<h2>{_escape(section.heading)}</h2>"
        f'<div class="postText">{section.body}</div>'
        for section in view.sections
    )
    body = (
        '<div class="postContainer">\n'
        f'<img src="{_escape(data.banner.url)}" alt="" />\n'
        '<div class="post">\n'
        f'<h1 class="title">{_escape(data.title)}</h1>\n'
        '<div class="postContent">'
        f'<span class="publicationInformation calendar">{_escape(view.published_on)}</span>'
        f'<span class="publicationInformation user">{_escape(data.author)}</span>'
        f'<span class="publicationInformation clock">{view.reading_time} min</span>'
        "</div>\n"
        f"{sections}\n"
        "</div>\n</div>"
    )
    return _document(f"{data.title or ''} | {site_name}", body)


def render_fallback(site_name: str) -> str:
    return _document(site_name, f"<p>{FALLBACK_MESSAGE}</p>")
