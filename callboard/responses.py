"""Turn concept rows into display data.

Identifier fields are swapped for something a person can read: users become
names, media become URLs, categories and opportunities become their names
and titles. Passwords never leave this layer because users are already
sanitized by their concept.
"""

from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import select

from callboard.concepts import Concepts
from callboard.concepts.base import to_uuids
from callboard.models import Base, Category, Media, Opportunity

DELETED = "DELETED"


def row_to_dict(row: Base) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class Responses:
    """Denormalizes rows using the concepts of the current request."""

    def __init__(self, concepts: Concepts):
        self.concepts = concepts

    async def _names(self, ids: Iterable[UUID]) -> list[str]:
        return await self.concepts.users.ids_to_names(list(ids))

    async def _media(self, ids: Iterable[UUID | str]) -> list[str]:
        return await self.concepts.media.ids_to_urls(to_uuids(ids))

    async def _media_urls(self, ids: list[UUID]) -> dict[UUID, str]:
        if not ids:
            return {}
        rows = await self.concepts.session.execute(
            select(Media.id, Media.url).where(Media.id.in_(set(ids)))
        )
        return {row.id: row.url for row in rows}

    async def _media_or_ids(self, ids: Iterable[UUID | str]) -> list[str]:
        """URLs for ids that are media, the bare id for anything else."""
        ids = to_uuids(ids)
        urls = await self._media_urls(ids)
        return [urls.get(i, str(i)) for i in ids]

    async def _media_or_deleted(self, ids: Iterable[UUID | str]) -> list[str]:
        """URLs for media that still exists, DELETED for media removed with its owner."""
        ids = to_uuids(ids)
        urls = await self._media_urls(ids)
        return [urls.get(i, DELETED) for i in ids]

    async def _one_media(self, media_id: UUID | None) -> str | None:
        if media_id is None:
            return None
        return (await self._media_or_ids([media_id]))[0]

    # ---------------------------------------------------------------------
    # Users
    # ---------------------------------------------------------------------

    async def user(self, user: dict[str, Any]) -> dict[str, Any]:
        return {**user, "profile_pic": await self._one_media(user.get("profile_pic"))}

    async def users(self, users: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [await self.user(u) for u in users]

    # ---------------------------------------------------------------------
    # Posts, comments, tags, votes
    # ---------------------------------------------------------------------

    async def posts(self, posts: list) -> list[dict[str, Any]]:
        if not posts:
            return []
        authors = await self._names(p.author for p in posts)
        category_ids = {p.category for p in posts}
        rows = await self.concepts.session.execute(
            select(Category.id, Category.name).where(Category.id.in_(category_ids))
        )
        categories = {row.id: row.name for row in rows}
        result = []
        for post, author in zip(posts, authors):
            result.append(
                {
                    **row_to_dict(post),
                    "author": author,
                    "category": categories.get(post.category, DELETED),
                    "media": await self._media(post.media),
                }
            )
        return result

    async def post(self, post) -> dict[str, Any]:
        return (await self.posts([post]))[0]

    async def comments(self, comments: list) -> list[dict[str, Any]]:
        authors = await self._names(c.author for c in comments)
        return [{**row_to_dict(c), "author": a} for c, a in zip(comments, authors)]

    async def comment(self, comment) -> dict[str, Any]:
        return (await self.comments([comment]))[0]

    async def tags(self, tags: list) -> list[dict[str, Any]]:
        taggers = await self._names(t.tagger for t in tags)
        tagged = await self._names(t.tagged for t in tags)
        return [
            {**row_to_dict(t), "tagger": tagger, "tagged": name}
            for t, tagger, name in zip(tags, taggers, tagged)
        ]

    async def votes(self, votes: list) -> list[dict[str, Any]]:
        users = await self._names(v.user for v in votes)
        return [{**row_to_dict(v), "user": u} for v, u in zip(votes, users)]

    # ---------------------------------------------------------------------
    # Connections, challenges, applause
    # ---------------------------------------------------------------------

    async def connection_requests(self, requests: list) -> list[dict[str, Any]]:
        senders = await self._names(r.from_user for r in requests)
        receivers = await self._names(r.to_user for r in requests)
        return [
            {**row_to_dict(r), "from_user": s, "to_user": t}
            for r, s, t in zip(requests, senders, receivers)
        ]

    async def connections(self, users: list[UUID]) -> list[dict[str, Any]]:
        names = await self._names(users)
        return [{"id": u, "name": n} for u, n in zip(users, names)]

    async def challenges(self, challenges: list) -> list[dict[str, Any]]:
        challengers = await self._names(c.challenger for c in challenges)
        return [{**row_to_dict(c), "challenger": n} for c, n in zip(challenges, challengers)]

    async def challenge(self, challenge) -> dict[str, Any]:
        return (await self.challenges([challenge]))[0]

    async def ranking(self, counters: list[dict[str, Any]]) -> list[dict[str, Any]]:
        names = await self._names(c["user"] for c in counters)
        return [{**c, "name": n} for c, n in zip(counters, names)]

    # ---------------------------------------------------------------------
    # Opportunities, applications, queues
    # ---------------------------------------------------------------------

    async def opportunities(self, opportunities: list) -> list[dict[str, Any]]:
        owners = await self._names(o.owner for o in opportunities)
        return [{**row_to_dict(o), "owner": n} for o, n in zip(opportunities, owners)]

    async def opportunity(self, opportunity) -> dict[str, Any]:
        return (await self.opportunities([opportunity]))[0]

    async def _titles(self, ids: Iterable[UUID]) -> list[str]:
        ids = list(ids)
        if not ids:
            return []
        rows = await self.concepts.session.execute(
            select(Opportunity.id, Opportunity.title).where(Opportunity.id.in_(set(ids)))
        )
        titles = {row.id: row.title for row in rows}
        return [titles.get(i, DELETED) for i in ids]

    async def applications(self, applications: list) -> list[dict[str, Any]]:
        owners = await self._names(a.owner for a in applications)
        applicants = await self._names(a.applicant for a in applications)
        titles = await self._titles(a.opportunity for a in applications)
        result = []
        for app, owner, applicant, title in zip(applications, owners, applicants, titles):
            result.append(
                {
                    **row_to_dict(app),
                    "owner": owner,
                    "applicant": applicant,
                    "opportunity": title,
                    "media": await self._media_or_deleted(app.media),
                }
            )
        return result

    async def application(self, application) -> dict[str, Any]:
        return (await self.applications([application]))[0]

    async def queue(self, queue) -> dict[str, Any]:
        manager = (await self._names([queue.manager]))[0]
        title = (await self._titles([queue.opportunity]))[0]
        return {
            **row_to_dict(queue),
            "manager": manager,
            "opportunity": title,
            "applicants": await self._names(to_uuids(queue.applicants)),
        }

    # ---------------------------------------------------------------------
    # Portfolios & folders
    # ---------------------------------------------------------------------

    async def portfolio(self, portfolio) -> dict[str, Any]:
        return {
            **row_to_dict(portfolio),
            "user": (await self._names([portfolio.user]))[0],
            "headshot": await self._one_media(portfolio.headshot),
            "media": await self._media(portfolio.media),
        }

    async def folders(self, folders: list) -> list[dict[str, Any]]:
        users = await self._names(f.user for f in folders)
        return [
            {**row_to_dict(f), "user": u, "contents": await self._media_or_ids(f.contents)}
            for f, u in zip(folders, users)
        ]

    async def folder(self, folder) -> dict[str, Any]:
        return (await self.folders([folder]))[0]
