# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "freshen",
# ]
#
# [tool.uv.sources]
# freshen = { path = "../", editable = true }
# ///

import logging
from datetime import datetime, timezone

from freshen import CacheableAction, Halt, Headers, Request

logging.basicConfig(level=logging.DEBUG)

UPDATED_AT = datetime(2025, 10, 26, 12, 0, 0, tzinfo=timezone.utc)


class ShowArticle(CacheableAction):
    def handle(self):
        outcome = self.fresh(etag="article-1", last_modified=UPDATED_AT)
        if isinstance(outcome, Halt):
            return outcome
        self.response.body = b"<h1>Article</h1>"


ShowArticle.declare_expires(600, "public")


def main():
    response = ShowArticle(Request("GET", "/articles/1"))()
    print(response.status_code, dict(response.headers.items()))

    conditional = Request("GET", "/articles/1", headers=Headers({"If-None-Match": '"article-1"'}))
    response = ShowArticle(conditional)()
    print(response.status_code, dict(response.headers.items()))


if __name__ == "__main__":
    main()
