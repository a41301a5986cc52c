# (c) Copyright Datacraft, 2026
"""Shared fixtures: an in-memory document store and a builder for its tree."""
import copy
from datetime import date
from typing import Any

import pytest

from sharereports.core.client import (
    DocumentClient,
    NotFoundError,
    ResilientFetcher,
    Response,
    RetryPolicy,
    TransientFetchError,
)
from sharereports.core.config import Settings

PARTNERS = "/bookmarks/trellisfw/trading-partners"
JOBS = "/bookmarks/services/trellis-shares"
TODAY = date(2026, 10, 18)


def _norm(path: str) -> str:
    return "/" + path.lstrip("/")


class FakeDocumentClient(DocumentClient):
    """Document graph held in a dict of path -> resource.

    Paths are walked like the real store walks them: links
    (``{"_id": ...}`` children) to stored resources are followed, any other
    child is returned as the nested object it is, and PUT merges into that
    nested object. ``failures`` maps a path to exceptions raised, one per
    call, before the path starts answering.
    """

    def __init__(self, resources: dict[str, Any] | None = None):
        self.resources = resources if resources is not None else {}
        self.failures: dict[str, list[Exception]] = {}
        self.fail_posts: Exception | None = None
        self.fail_puts: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self._counter = 0

    def fail(self, path: str, *errors: Exception) -> None:
        self.failures.setdefault(_norm(path), []).extend(errors)

    def _canonical(self, path: str) -> str:
        """Rewrite a tree path into resource-relative form, following links."""
        if path in self.resources:
            return path
        parent, _, key = path.rpartition("/")
        if not parent:
            return path
        base = self._canonical(parent)
        try:
            container = self._lookup(base)
        except NotFoundError:
            return f"{base}/{key}"
        child = container.get(key) if isinstance(container, dict) else None
        if isinstance(child, dict) and _norm(str(child.get("_id", ""))) in self.resources:
            return _norm(child["_id"])
        return f"{base}/{key}"

    def _lookup(self, path: str) -> Any:
        """Stored resource at ``path``, or the object nested at that spot."""
        if path in self.resources:
            return self.resources[path]
        parent, _, key = path.rpartition("/")
        if not parent:
            raise NotFoundError(path)
        container = self._lookup(parent)
        if not isinstance(container, dict) or key not in container:
            raise NotFoundError(path)
        return container[key]

    def _resolve(self, path: str) -> Any:
        return self._lookup(self._canonical(path))

    async def _read(self, method: str, path: str) -> Any:
        p = _norm(path)
        self.calls.append((method, p))
        pending = self.failures.get(p)
        if pending:
            raise pending.pop(0)
        return self._resolve(p)

    async def get(self, path: str) -> Response:
        value = await self._read("GET", path)
        if isinstance(value, bytes):
            raise TransientFetchError(path, ValueError("binary resource"))
        return Response(data=copy.deepcopy(value))

    async def get_bytes(self, path: str) -> bytes:
        value = await self._read("GET", path)
        if not isinstance(value, bytes):
            raise TransientFetchError(path, ValueError("not binary"))
        return value

    async def post(self, path, data=None, content=None, content_type=None) -> Response:
        self.calls.append(("POST", _norm(path)))
        if self.fail_posts is not None:
            raise self.fail_posts
        self._counter += 1
        loc = f"resources/new{self._counter}"
        if content is not None:
            self.resources[_norm(loc)] = content
        else:
            self.resources[_norm(loc)] = {"_id": loc, **copy.deepcopy(data or {})}
        return Response(headers={"content-location": f"/{loc}"}, status=201)

    async def put(self, path: str, data: Any) -> Response:
        p = _norm(path)
        self.calls.append(("PUT", p))
        if p in self.fail_puts:
            raise self.fail_puts[p]
        target_path = self._canonical(p)
        try:
            target = self._lookup(target_path)
        except NotFoundError:
            parent, _, key = target_path.rpartition("/")
            try:
                container = self._lookup(parent)
            except NotFoundError:
                container = None
            if isinstance(container, dict):
                target = container.setdefault(key, {})
            else:
                # nothing to nest under: a resource of its own, e.g. a binary's _meta
                target = self.resources.setdefault(target_path, {"_id": target_path.lstrip("/")})
        target.update(copy.deepcopy(data))
        return Response(status=204)


class Tree:
    """Builds the bookmark tree the crawler and aggregator walk."""

    def __init__(self):
        self.resources: dict[str, Any] = {}

    def _listing(self, path: str) -> dict:
        return self.resources.setdefault(
            path, {"_id": f"resources{path}", "_rev": 1, "_type": "application/json"}
        )

    def _link(self, listing: str, key: str, doc_id: str) -> None:
        self._listing(listing)[key] = {"_id": doc_id, "_rev": 1}

    def partner(self, pid: str, masterid: str | None = None, name: str | None = None,
                coi_emails: str = "", fsqa_emails: str = "") -> str:
        self._listing(PARTNERS)[pid] = {"_id": f"resources/{pid}", "_rev": 1}
        self._listing(PARTNERS)["masterid-index"] = {"_id": "resources/masterid-index"}
        self.resources[f"/resources/{pid}"] = {
            "_id": f"resources/{pid}",
            "masterid": masterid or f"m-{pid}",
            "name": name or f"Partner {pid}",
            "coi-emails": coi_emails,
            "fsqa-emails": fsqa_emails,
        }
        return pid

    def _document(self, doc_id: str, body: dict, meta: dict) -> str:
        self.resources[f"/{doc_id}"] = {
            "_id": doc_id,
            "_rev": 2,
            "_meta": {"_id": f"{doc_id}/_meta"},
            **body,
        }
        self.resources[f"/{doc_id}/_meta"] = {"_id": f"{doc_id}/_meta", **meta}
        return doc_id

    def coi(self, doc_id: str, holder: str = "Holder Inc", expires=("2025-01-01",),
            created: int = 1_700_000_000, copy_of: str | None = None) -> str:
        meta: dict = {"stats": {"created": created}}
        if copy_of:
            meta["copy"] = {"src": {"_ref": copy_of}}
        body = {
            "certificate": {"file_name": f"{doc_id.split('/')[-1]}.pdf"},
            "holder": {"name": holder},
            "producer": {"name": "Producer LLC"},
            "insured": {"name": "Insured Farms"},
            "policies": {
                f"p{i}": {"expire_date": expire} for i, expire in enumerate(expires)
            },
        }
        return self._document(doc_id, body, meta)

    def audit(self, doc_id: str, organization: str = "Good Foods",
              end: str = "03/01/2027", score=(95, "%"),
              created: int = 1_700_000_000, copy_of: str | None = None) -> str:
        meta: dict = {"stats": {"created": created}}
        if copy_of:
            meta["copy"] = {"src": {"_ref": copy_of}}
        body = {
            "scheme": {"name": "SQF"},
            "organization": {"name": organization},
            "certificate_validity_period": {"start": "03/01/2026", "end": end},
            "score": {"final": {"value": score[0], "units": score[1]}},
        }
        return self._document(doc_id, body, meta)

    def publish(self, collection: str, doc_id: str) -> None:
        self._link(f"/bookmarks/trellisfw/{collection}", doc_id.split("/")[-1], doc_id)

    def hold(self, pid: str, collection: str, doc_id: str) -> None:
        self._link(
            f"{PARTNERS}/{pid}/user/bookmarks/trellisfw/{collection}",
            doc_id.split("/")[-1],
            doc_id,
        )

    def job(self, status: str, day: str | None, sid: str, doc_id: str, pid: str,
            doctype: str = "cois", times=("2026-10-17T14:05:00Z",)) -> str:
        if status == "pending":
            listing = f"{JOBS}/jobs"
        else:
            queue = self._listing(f"{JOBS}/jobs-{status}")
            queue.setdefault("day-index", {})[day] = {"_id": f"resources/{status}-{day}"}
            listing = f"{JOBS}/jobs-{status}/day-index/{day}"
        self._link(listing, sid, f"resources/{sid}")
        self.resources[f"/resources/{sid}"] = {
            "_id": f"resources/{sid}",
            "config": {
                "src": f"/{doc_id}",
                "doctype": doctype,
                "chroot": f"{PARTNERS}/{pid}/user/bookmarks",
            },
            "updates": {
                f"u{i}": {"status": status, "time": t} for i, t in enumerate(times)
            },
        }
        return sid

    def client(self) -> FakeDocumentClient:
        return FakeDocumentClient(self.resources)


@pytest.fixture
def tree():
    return Tree()


@pytest.fixture
def settings(tmp_path):
    return Settings(domain="example.org", token="secret", fallback_dir=tmp_path / "fallback")


def make_fetcher(client: DocumentClient, attempts: int = 5) -> ResilientFetcher:
    return ResilientFetcher(client, RetryPolicy(max_attempts=attempts), max_in_flight=10)
