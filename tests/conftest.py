from app.schemas.blog import PostPagination, PostSummary


def make_summary_doc(uid, title=None, published="2021-03-25T19:25:28+00:00"):
    """Raw Prismic document as returned with the listing field projection."""
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "post",
        "first_publication_date": published,
        "data": {
            "title": title or uid.replace("-", " ").title(),
            "subtitle": f"About {uid}",
            "author": "Joseph Oliveira",
        },
    }


def make_detail_doc(uid, content=None):
    doc = make_summary_doc(uid)
    doc["data"]["banner"] = {"url": f"https://images.prismic.io/{uid}.png", "alt": None}
    doc["data"]["content"] = (
        content
        if content is not None
        else [
            {
                "heading": "Proin et varius",
                "body": [
                    {"type": "paragraph", "text": "Nullam dolor sapien", "spans": []},
                ],
            }
        ]
    )
    return doc


def make_pagination(*uids, next_page=None) -> PostPagination:
    return PostPagination(
        next_page=next_page,
        results=[
            PostSummary(uid=uid, first_publication_date=None, data={"title": uid})
            for uid in uids
        ],
    )


class FakePrismicClient:
    """
    In-memory stand-in for PrismicClient recording the queries it receives.
    """

    def __init__(self, search_response=None, docs_by_uid=None):
        self.search_response = search_response or {"results": [], "next_page": None}
        self.docs_by_uid = docs_by_uid or {}
        self.queries = []
        self.uid_lookups = []

    def query(self, predicates, fetch=None, page_size=20, page=1, orderings=None):
        self.queries.append(
            {"predicates": list(predicates), "fetch": fetch, "page_size": page_size}
        )
        return self.search_response

    def get_by_uid(self, doc_type, uid):
        self.uid_lookups.append((doc_type, uid))
        return self.docs_by_uid.get(uid)


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    """

    def __init__(self, docs=None, next_page=None):
        self.docs = docs or []
        self.next_page = next_page
        self.page_sizes = []

    def query_posts(self, page_size):
        self.page_sizes.append(page_size)
        return {"results": self.docs[:page_size], "next_page": self.next_page}

    def list_post_docs(self, page_size):
        self.page_sizes.append(page_size)
        return self.docs[:page_size]

    def get_post_doc(self, uid):
        return next((doc for doc in self.docs if doc.get("uid") == uid), None)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, listing=None, post=None):
        self._listing = listing or PostPagination()
        self._post = post
        self.listing_calls = 0

    def get_listing_page(self):
        self.listing_calls += 1
        return self._listing

    def get_post(self, slug: str):
        return self._post

    def build_post_view(self, post):
        from app.services.posts_service import PostsService

        return PostsService(repo=None).build_post_view(post)
