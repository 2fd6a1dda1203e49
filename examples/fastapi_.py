# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "freshen[fastapi]",
#     "httpx",
# ]
#
# [tool.uv.sources]
# freshen = { path = "../", editable = true }
# ///


import asyncio
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request, Response

from freshen.fastapi import cache_control, fresh

app = FastAPI()

UPDATED_AT = datetime(2025, 10, 26, 12, 0, 0, tzinfo=timezone.utc)
processed_requests = 0


@app.get("/items/", dependencies=[cache_control("public", {"max_age": 5})])
async def read_item(request: Request, response: Response):
    global processed_requests
    not_modified = fresh(request, response, etag=int(UPDATED_AT.timestamp()), last_modified=UPDATED_AT)
    if not_modified is not None:
        return not_modified
    processed_requests += 1
    return {"updated_at": UPDATED_AT.isoformat(), "processed_requests": processed_requests}


async def main():
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app)) as client:
        response = await client.get("http://testserver/items/")
        print(f"First response: status={response.status_code}, headers={dict(response.headers)}")

        response = await client.get(
            "http://testserver/items/",
            headers={"If-None-Match": response.headers["ETag"]},
        )
        print(f"Revalidation: status={response.status_code}, processed_requests={processed_requests}")


if __name__ == "__main__":
    asyncio.run(main())
