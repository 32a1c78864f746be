from typing import List, Optional

from app.db.prismic import PrismicClient, predicate_at

POST_TYPE = "post"
SUMMARY_FIELDS = ["post.title", "post.subtitle", "post.author"]


class PrismicPostsRepo:
    def __init__(self, client: PrismicClient):
        self.client = client

    def query_posts(self, page_size: int) -> dict:
        """First page of post documents, projected to the listing fields."""
        return self.client.query(
            [predicate_at("document.type", POST_TYPE)],
            fetch=SUMMARY_FIELDS,
            page_size=page_size,
        )

    def list_post_docs(self, page_size: int) -> List[dict]:
        return self.query_posts(page_size).get("results") or []

    def get_post_doc(self, uid: str) -> Optional[dict]:
        return self.client.get_by_uid(POST_TYPE, uid)
