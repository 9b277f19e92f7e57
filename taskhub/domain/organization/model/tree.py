"""Nested view of the organization tree."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from taskhub.domain.organization.model.organization import Organization


class OrganizationNode(BaseModel):
    organization: Organization
    children: list["OrganizationNode"] = Field(default_factory=list)


def build_hierarchy(organizations: Iterable[Organization]) -> list[OrganizationNode]:
    """Nest organizations under their parents, ordered by level then name.

    An organization whose parent is not among `organizations` becomes a root
    of the result, so a partial view (e.g. a sub-organization admin's) still
    renders.
    """
    ordered = sorted(organizations, key=lambda o: (o.level, o.name))
    nodes = {org.id: OrganizationNode(organization=org) for org in ordered}

    roots: list[OrganizationNode] = []
    for org in ordered:
        node = nodes[org.id]
        parent = nodes.get(org.parent_id) if org.parent_id is not None else None
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots
