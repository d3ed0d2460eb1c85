"""FNCI (Palamida) workspace export — the import format for license review groups."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from license_fetcher.engines.license_resolver.dependency_set import DependencySet
from license_fetcher.engines.license_resolver.models import ResolvedDependency

EXPORT_SCRIPT_COMPATIBILITY = "6.1"

# Characters outside the XML 1.0 Char production; ElementTree writes them unescaped.
_XML_ILLEGAL_RE = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# Group fields the importer expects to be present, in export order.
_EMPTY_BEFORE_LICENSE = (
    "isDisclosed",
    "isIgnored",
    "component",
    "componentVersion",
    "selectedLicense",
    "possibleLicenses",
)
_EMPTY_AFTER_LICENSE = (
    "extNotes",
    "intNotes",
    "isEngineeringActionRequired",
    "isLegalActionRequired",
    "auditorReviewNotes",
    "detectionNotes",
    "fieldOfUse",
    "includeInThirdPartyNotices",
    "isModified",
    "noticeCopyrightStatements",
    "noticeLicenseText",
    "noticeLicenseURL",
    "noticeOtherFlowThroughNotices",
    "noticeTitle",
    "noticeTitleURL",
    "isShipped",
    "isSourceDistributionRequired",
    "thirdPartySourceURL",
)
_EMPTY_AFTER_DESCRIPTION = (
    "publishedBy",
    "isPublished",
    "publishedDate",
    "isRemediation",
    "groupMetadata",
)


def _xml_safe(text: str) -> str:
    return _XML_ILLEGAL_RE.sub("", text)


def _sub(parent: ET.Element, tag: str, text: str | None = None) -> ET.Element:
    el = ET.SubElement(parent, tag)
    if text is not None:
        el.text = _xml_safe(text)
    return el


def _group(parent: ET.Element, dep: ResolvedDependency, owner: str) -> None:
    group = _sub(parent, "group")
    group.set("name", _xml_safe(dep.label))
    _sub(group, "id", "-1")
    _sub(group, "owner", owner)
    _sub(group, "title")
    _sub(group, "statusId", "2")
    _sub(group, "priorityId", "6")
    for tag in _EMPTY_BEFORE_LICENSE:
        _sub(group, tag)
    _sub(
        group,
        "distributionLicenseText",
        f"License can be found at the website: {dep.license_url}",
    )
    for tag in _EMPTY_AFTER_LICENSE:
        _sub(group, tag)
    _sub(group, "url", dep.project_url)
    _sub(group, "description", dep.description)
    for tag in _EMPTY_AFTER_DESCRIPTION:
        _sub(group, tag)
    _sub(group, "isSystemGenerated", "false")
    _sub(group, "systemGeneratedGroupId")
    _sub(group, "updateDate")


def render_fnci_report(
    dependencies: DependencySet,
    *,
    owner: str,
    hostname: str,
    now: datetime | None = None,
) -> str:
    """Render *dependencies* as a ``palamidaWorkspace`` XML document.

    One ``<group>`` per unique dependency (sorted by name) and one
    ``<file>`` per manifest (largest first) referencing its groups by name.
    """
    now = now or datetime.now(timezone.utc)

    root = ET.Element(
        "palamidaWorkspace",
        {
            "exportDate": now.strftime("%Y-%m-%d %H:%M:%S"),
            "exportScriptCompatibleWithPalamidaVersion": EXPORT_SCRIPT_COMPATIBILITY,
            "exportScriptVersion": "",
            "exportTimestampGMT": str(int(now.timestamp())),
            "serverName": _xml_safe(hostname),
        },
    )

    groups = _sub(root, "groups")
    for dep in dependencies.deduplicated():
        _group(groups, dep, owner)

    files = _sub(root, "files")
    for manifest, members in dependencies.grouped().items():
        file_el = _sub(files, "file")
        file_el.set("fullPath", _xml_safe(str(manifest.path)))
        _sub(file_el, "fileName", manifest.name)
        _sub(file_el, "md5")
        member_groups = _sub(file_el, "groups")
        for dep in members:
            _sub(member_groups, "group", dep.label)

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return f"<?xml version='1.0' encoding='utf-8'?>\n{body}\n"
