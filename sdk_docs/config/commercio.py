"""The Commercio.network Dart SDK documentation site, as a configuration value.

``config/site.yaml`` holds the same data; the test suite keeps the two in
sync.
"""

from __future__ import annotations

from .models import (
    HeadTag,
    MarkdownOptions,
    NavLink,
    SidebarEntry,
    SidebarSection,
    SiteConfig,
    ThemeConfig,
)


def _section(title: str, *children: tuple[str, str]) -> SidebarSection:
    return SidebarSection(
        title=title,
        collapsible=True,
        entries=tuple(SidebarEntry(path, label) for path, label in children),
    )


SIDEBAR: tuple[SidebarSection, ...] = (
    _section("Wallet", ("wallet/create-wallet", "Create a wallet")),
    _section(
        "Id helpers",
        ("lib/id/id_helper", "IdHelper"),
        ("lib/id/did_document_helper", "DidDocumentHelper"),
        ("lib/id/request_did_power_up_helper", "RequestDidPowerUpHelper"),
    ),
    _section(
        "Docs helpers",
        ("lib/docs/docs_helper", "DocsHelper"),
        ("lib/docs/commercio_doc_helper", "CommercioDocHelper"),
        ("lib/docs/commercio_doc_receipt_helper", "CommercioDocReceiptHelper"),
    ),
    _section(
        "Membership helpers",
        ("lib/membership/membership_helper", "MembershipHelper"),
        ("lib/membership/buy_membership_helper", "BuyMembershipHelper"),
        ("lib/membership/invite_user_helper", "InviteUserHelper"),
    ),
    _section(
        "Mint helpers",
        ("lib/mint/mint_helper", "MintHelper"),
        ("lib/mint/open_cdp_helper", "OpenCdpHelper"),
        ("lib/mint/close_cdp_helper", "CloseCdpHelper"),
    ),
    _section("Tx helpers", ("lib/tx/tx_helper", "TxHelper")),
    _section("Sign helpers", ("lib/crypto/sign_helper", "SignHelper")),
    _section(
        "Utility helpers",
        ("lib/crypto/encryption_helper", "EncryptionHelper"),
        ("lib/crypto/keys_helper", "KeysHelper"),
    ),
    _section("Glossary", ("lib/glossary", "Glossary")),
)


def commercio_site_config() -> SiteConfig:
    """Return the Commercio.network Dart SDK documentation site configuration."""
    return SiteConfig(
        title="Commercio.network Dart SDK Documentation",
        description="Documentation for the Commercio.network blockhain Dart SDK.",
        head=(
            HeadTag(
                "link", {"rel": "commercio-icon", "href": "/.vuepress/icon.png"}
            ),
        ),
        markdown=MarkdownOptions(line_numbers=True),
        theme=ThemeConfig(
            repo="commercionetwork/commercio-sdk.dart",
            edit_links=True,
            docs_dir="docs",
            docs_branch="master",
            edit_link_text="Edit this page on Github",
            last_updated=True,
            nav=(NavLink("Commercio.network", "https://commercio.network"),),
            sidebar_depth=2,
            sidebar=SIDEBAR,
        ),
    )


__all__ = ["SIDEBAR", "commercio_site_config"]
