"""GraphQL implementation of `core.interfaces.registry.OrbRegistry`.

Each public method maps to one operation of the registry contract. Where the
GraphQL API needs several requests for one operation (increment/promote look
up the latest release first) the adapter chains them; the core still sees a
single call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as SchemaError

from adapters.graphql_client import GraphQLClient, join_error_messages
from adapters.orb_source import parse_orb_elements, read_orb_yaml
from core.config import AppSettings
from core.domain.errors import RegistryError
from core.domain.models import (
    OrbConfigResult,
    OrbIdentifier,
    OrbsForListing,
    OrbVersion,
    OrbWithData,
)
from core.domain.segments import Segment

logger = logging.getLogger(__name__)

ORB_ID_QUERY = """
query ($name: String!, $namespace: String) {
  orb(name: $name) {
    id
  }
  registryNamespace(name: $namespace) {
    id
  }
}
"""

NAMESPACE_ID_QUERY = """
query ($name: String!) {
  registryNamespace(name: $name) {
    id
  }
}
"""

LATEST_VERSION_QUERY = """
query ($name: String!) {
  orb(name: $name) {
    versions(count: 1) {
      version
    }
  }
}
"""

PUBLISH_MUTATION = """
mutation ($config: String!, $orbId: UUID!, $version: String!) {
  publishOrb(orbId: $orbId, orbYaml: $config, version: $version) {
    orb {
      version
    }
    errors {
      message
    }
  }
}
"""

PROMOTE_MUTATION = """
mutation ($orbId: UUID!, $devVersion: String!, $semanticVersion: String!) {
  promoteOrb(orbId: $orbId, devVersion: $devVersion, semanticVersion: $semanticVersion) {
    orb {
      version
      source
    }
    errors {
      message
      type
    }
  }
}
"""

CREATE_ORB_MUTATION = """
mutation ($name: String!, $registryNamespaceId: UUID!) {
  createOrb(name: $name, registryNamespaceId: $registryNamespaceId) {
    orb {
      id
    }
    errors {
      message
      type
    }
  }
}
"""

LIST_ORBS_QUERY = """
query ListOrbs ($first: Int!, $after: String!, $certifiedOnly: Boolean!) {
  orbs(first: $first, after: $after, certifiedOnly: $certifiedOnly) {
    totalCount
    edges {
      cursor
      node {
        name
        versions(count: 1) {
          version
          source
        }
      }
    }
    pageInfo {
      hasNextPage
    }
  }
}
"""

LIST_NAMESPACE_ORBS_QUERY = """
query namespaceOrbs ($namespace: String, $first: Int!, $after: String!) {
  registryNamespace(name: $namespace) {
    name
    orbs(first: $first, after: $after) {
      totalCount
      edges {
        cursor
        node {
          name
          versions(count: 1) {
            version
            source
          }
        }
      }
      pageInfo {
        hasNextPage
      }
    }
  }
}
"""

ORB_SOURCE_QUERY = """
query ($orbVersionRef: String!) {
  orbVersion(orbVersionRef: $orbVersionRef) {
    id
    version
    orb {
      id
    }
    source
  }
}
"""

ORB_INFO_QUERY = """
query ($orbVersionRef: String!) {
  orbVersion(orbVersionRef: $orbVersionRef) {
    id
    version
    orb {
      id
      createdAt
      name
      highestVersion
      versions {
        createdAt
        version
      }
    }
    source
    createdAt
  }
}
"""

ORB_CONFIG_MUTATION = """
mutation ValidateOrb ($config: String!) {
  orbConfig(orbYaml: $config) {
    valid
    errors {
      message
    }
    sourceYaml
    outputYaml
  }
}
"""


def next_version(current: str, segment: Segment) -> str:
    """Bump `MAJOR.MINOR.PATCH` by `segment` (pre-release/build suffixes are dropped)."""

    core = current.split("-", 1)[0].split("+", 1)[0]
    parts = core.split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise RegistryError(f"latest version `{current}` is not a semantic version")
    major, minor, patch = (int(p) for p in parts)
    if segment is Segment.MAJOR:
        return f"{major + 1}.0.0"
    if segment is Segment.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"


def _payload(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Mutation payload under `key`; payload-level `errors` raise."""

    payload = data.get(key)
    if not isinstance(payload, dict):
        raise RegistryError(f"{key}: response contained no payload")
    messages = join_error_messages(payload.get("errors"))
    if messages:
        raise RegistryError(messages)
    return payload


def _orb_from_node(node: dict[str, Any]) -> OrbWithData:
    name = str(node.get("name") or "")
    orb = OrbWithData(name=name)
    versions = node.get("versions") or []
    if versions and isinstance(versions[0], dict):
        latest = versions[0]
        orb.highest_version = str(latest.get("version") or "")
        elements = parse_orb_elements(
            str(latest.get("source") or ""),
            label=f"{name} {orb.highest_version}",
        )
        orb.commands = elements["commands"]
        orb.jobs = elements["jobs"]
        orb.executors = elements["executors"]
    return orb


class GraphQLOrbRegistry:
    """Registry adapter backed by the GraphQL API."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._gql = GraphQLClient(self._settings, transport=transport)

    async def __aenter__(self) -> "GraphQLOrbRegistry":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self._gql.aclose()

    async def resolve_id(self, namespace: str, name: str) -> OrbIdentifier:
        data = await self._gql.run(
            ORB_ID_QUERY,
            {"name": f"{namespace}/{name}", "namespace": namespace},
            operation="OrbID",
        )
        orb = data.get("orb") or {}
        ns = data.get("registryNamespace") or {}
        orb_id = orb.get("id") if isinstance(orb, dict) else None
        namespace_id = ns.get("id") if isinstance(ns, dict) else None

        if not orb_id:
            if not namespace_id:
                raise RegistryError(
                    f"the '{namespace}' namespace does not exist. Did you misspell the "
                    "namespace, or maybe you meant to create the namespace first?"
                )
            raise RegistryError(
                f"the '{name}' orb does not exist in the '{namespace}' namespace. "
                f"You can create a new orb with `orbctl orb create {namespace}/{name}`"
            )
        return OrbIdentifier(orb_id=orb_id, namespace_id=namespace_id)

    async def _latest_version(self, namespace: str, name: str) -> str:
        data = await self._gql.run(
            LATEST_VERSION_QUERY,
            {"name": f"{namespace}/{name}"},
            operation="OrbLatestVersion",
        )
        orb = data.get("orb")
        if not isinstance(orb, dict):
            raise RegistryError(f"no Orb '{namespace}/{name}' was found")
        versions = orb.get("versions") or []
        if not versions:
            return "0.0.0"
        return str(versions[0].get("version") or "0.0.0")

    async def publish_by_id(self, path: str, orb_id: str, version: str) -> OrbWithData:
        config = read_orb_yaml(path)
        data = await self._gql.run(
            PUBLISH_MUTATION,
            {"config": config, "orbId": orb_id, "version": version},
            operation="PublishOrb",
        )
        payload = _payload(data, "publishOrb")
        published = payload.get("orb") or {}
        return OrbWithData(highest_version=str(published.get("version") or version))

    async def increment_version(
        self, path: str, namespace: str, name: str, segment: Segment
    ) -> OrbWithData:
        identifier = await self.resolve_id(namespace, name)
        current = await self._latest_version(namespace, name)
        target = next_version(current, segment)
        logger.debug("increment %s/%s: %s -> %s", namespace, name, current, target)
        orb = await self.publish_by_id(path, identifier.orb_id, target)
        orb.name = f"{namespace}/{name}"
        return orb

    async def promote(
        self, namespace: str, name: str, version: str, segment: Segment
    ) -> OrbWithData:
        identifier = await self.resolve_id(namespace, name)
        current = await self._latest_version(namespace, name)
        target = next_version(current, segment)
        logger.debug("promote %s/%s@%s: %s -> %s", namespace, name, version, current, target)
        data = await self._gql.run(
            PROMOTE_MUTATION,
            {"orbId": identifier.orb_id, "devVersion": version, "semanticVersion": target},
            operation="PromoteOrb",
        )
        payload = _payload(data, "promoteOrb")
        promoted = payload.get("orb") or {}
        return OrbWithData(
            name=f"{namespace}/{name}",
            highest_version=str(promoted.get("version") or target),
        )

    async def create_orb(self, namespace: str, name: str) -> OrbIdentifier:
        data = await self._gql.run(
            NAMESPACE_ID_QUERY,
            {"name": namespace},
            operation="NamespaceID",
        )
        ns = data.get("registryNamespace")
        namespace_id = ns.get("id") if isinstance(ns, dict) else None
        if not namespace_id:
            raise RegistryError(f"the namespace '{namespace}' does not exist")

        data = await self._gql.run(
            CREATE_ORB_MUTATION,
            {"name": name, "registryNamespaceId": namespace_id},
            operation="CreateOrb",
        )
        payload = _payload(data, "createOrb")
        created = payload.get("orb") or {}
        orb_id = created.get("id")
        if not orb_id:
            raise RegistryError("createOrb: response contained no orb id")
        return OrbIdentifier(orb_id=orb_id, namespace_id=namespace_id)

    async def _paginate(
        self,
        query: str,
        variables: dict[str, Any],
        *,
        operation: str,
        connection_path: tuple[str, ...],
        missing: str,
    ) -> OrbsForListing:
        listing = OrbsForListing()
        cursor = ""
        while True:
            data = await self._gql.run(
                query,
                {**variables, "first": self._settings.listing_page_size, "after": cursor},
                operation=operation,
            )
            connection: Any = data
            for key in connection_path:
                connection = connection.get(key) if isinstance(connection, dict) else None
                if connection is None:
                    raise RegistryError(missing)

            previous = cursor
            edges = connection.get("edges") or []
            for edge in edges:
                if not isinstance(edge, dict):
                    continue
                node = edge.get("node")
                if isinstance(node, dict):
                    listing.orbs.append(_orb_from_node(node))
                cursor = str(edge.get("cursor") or cursor)

            page_info = connection.get("pageInfo") or {}
            if not edges or not page_info.get("hasNextPage"):
                return listing
            if cursor == previous:
                raise RegistryError(f"{operation}: next page requested without a new cursor")

    async def list_all(self, include_uncertified: bool) -> OrbsForListing:
        return await self._paginate(
            LIST_ORBS_QUERY,
            {"certifiedOnly": not include_uncertified},
            operation="ListOrbs",
            connection_path=("orbs",),
            missing="ListOrbs: response contained no orbs",
        )

    async def list_by_namespace(self, namespace: str) -> OrbsForListing:
        return await self._paginate(
            LIST_NAMESPACE_ORBS_QUERY,
            {"namespace": namespace},
            operation="ListNamespaceOrbs",
            connection_path=("registryNamespace", "orbs"),
            missing=f"No namespace found: {namespace}",
        )

    async def _orb_version(self, query: str, ref: str, *, operation: str) -> dict[str, Any]:
        data = await self._gql.run(query, {"orbVersionRef": ref}, operation=operation)
        orb_version = data.get("orbVersion")
        if not isinstance(orb_version, dict):
            raise RegistryError(
                f"no Orb '{ref}' was found; please check that the Orb reference is correct"
            )
        return orb_version

    async def fetch_source(self, ref: str) -> str:
        orb_version = await self._orb_version(ORB_SOURCE_QUERY, ref, operation="OrbSource")
        return str(orb_version.get("source") or "")

    async def fetch_info(self, ref: str) -> OrbWithData:
        orb_version = await self._orb_version(ORB_INFO_QUERY, ref, operation="OrbInfo")
        meta = orb_version.get("orb") or {}
        try:
            orb = OrbWithData(
                name=str(meta.get("name") or ""),
                highest_version=str(meta.get("highestVersion") or ""),
                created_at=str(meta.get("createdAt") or ""),
                versions=[
                    OrbVersion.model_validate(v)
                    for v in meta.get("versions") or []
                    if isinstance(v, dict)
                ],
            )
        except SchemaError as exc:
            raise RegistryError(f"Corrupt Orb {ref}: {exc}") from exc
        elements = parse_orb_elements(
            str(orb_version.get("source") or ""),
            label=f"{orb.name} {orb_version.get('version') or ''}".strip(),
        )
        orb.commands = elements["commands"]
        orb.jobs = elements["jobs"]
        orb.executors = elements["executors"]
        return orb

    async def validate_or_process(self, path: str) -> OrbConfigResult:
        config = read_orb_yaml(path)
        data = await self._gql.run(
            ORB_CONFIG_MUTATION,
            {"config": config},
            operation="ValidateOrb",
        )
        payload = data.get("orbConfig")
        if not isinstance(payload, dict):
            raise RegistryError("orbConfig: response contained no payload")
        return OrbConfigResult(
            valid=bool(payload.get("valid")),
            errors=[
                str(e.get("message"))
                for e in payload.get("errors") or []
                if isinstance(e, dict) and e.get("message")
            ],
            source_yaml=str(payload.get("sourceYaml") or ""),
            output_yaml=str(payload.get("outputYaml") or ""),
        )
