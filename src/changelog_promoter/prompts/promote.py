"""Prompt templates for release announcements.

Turns a VersionEntry into the instruction prompt for an LLM plus the raw
context blocks (changelog, code diff, README) it refers to. The changelog
source is called out explicitly because git-chglog output and
conventional-changelog output need to be read differently.
"""

from __future__ import annotations

from changelog_promoter.schemas import PromotionTask, SourceAdapterName, VersionEntry

# ---------------------------------------------------------------------------
# Source descriptions
# ---------------------------------------------------------------------------

SOURCE_DESCRIPTIONS: dict[str, str] = {
    SourceAdapterName.GIT_CHGLOG.value: (
        "Generated by **git-chglog**. It usually lists the individual commits "
        "in the version range; distil the key features, fixes and breaking "
        "changes from it."
    ),
    SourceAdapterName.RELEASE_IT.value: (
        "Generated by **release-it (conventional-changelog)**. It is usually "
        "grouped by type (Features, Bug Fixes, BREAKING CHANGES); make use of "
        "that structure."
    ),
}

UNKNOWN_SOURCE_DESCRIPTION = (
    "Unknown or unspecified source. Analyse its structure carefully."
)

# ---------------------------------------------------------------------------
# Prompt Template
# ---------------------------------------------------------------------------

PROMPT_TEMPLATE = """
You are the technical marketing lead for the open source project {project}. Write an engaging release announcement for version v{version} (release date: {date}). The audience is developers.

## Available sources
1.  **Changelog (source: {source})**: {source_description}
2.  **Code diff**: the code changes between this version and the previous one.
3.  **Project README (may be truncated)**: an overview of the project and its goals.

## Requirements
1.  **Combine the sources**: use all of the information above. **Keep the changelog source ({source}) in mind** and adjust how you read it. Prefer the changelog, but if it is too thin or clearly disagrees with the code diff, infer the key features and improvements from the code changes instead. Use the README for project background.
2.  **Focus on value**: turn technical changes into clear user benefits. Explain why a feature matters, not only what it is.
3.  **Clear structure**: follow the template below and put the highlights first.
4.  **Professional and upbeat**: positive tone suited to a developer community; emoji in moderation.
5.  **Length**: keep it under 300 words.

## Announcement template
\"\"\"
# 🎉 {project} v{version} is out!

[Opening: one or two sentences on the theme or the most important improvement of this release.]

## ✨ Highlights

*   **[Feature / improvement 1 + emoji]**: [What it does, the problem it solves and how users benefit. Combine the changelog (source: {source}) and the code diff.]
*   **[Feature / improvement 2 + emoji]**: [Same for the second important change.]
*   **(Optional) [Feature / improvement 3 + emoji]**: [Any further highlight.]

## 🛠️ Other improvements and fixes

[Two to four other optimisations, fixes or minor features worth mentioning.]

## 🚀 Try it now

We recommend that all users upgrade to v{version}.

👉 [Documentation or GitHub release link]
👉 [Repository link]

Thanks to the community for the support. We look forward to your feedback!
\"\"\"

Using the template and requirements above, write a professional, engaging announcement based on the changelog, code diff and README provided below. Replace the bracketed parts and make sure the result reads naturally.

Context:
"""


# ---------------------------------------------------------------------------
# Prompt Builder
# ---------------------------------------------------------------------------


def describe_source(source: SourceAdapterName | str) -> str:
    """Return reading instructions for a changelog source."""
    key = source.value if isinstance(source, SourceAdapterName) else source
    return SOURCE_DESCRIPTIONS.get(key, UNKNOWN_SOURCE_DESCRIPTION)


def build_promotion_task(entry: VersionEntry) -> PromotionTask:
    """Build the announcement prompt and context for a VersionEntry.

    Args:
        entry: The normalized release record

    Returns:
        A PromotionTask whose context holds description, code_diff, readme
        and source_adapter
    """
    source = entry.source_adapter.value
    prompt = PROMPT_TEMPLATE.format(
        project=entry.project_name,
        version=entry.version.removeprefix("v"),
        date=entry.date or "unknown",
        source=source,
        source_description=describe_source(entry.source_adapter),
    )
    return PromotionTask(
        prompt=prompt,
        context={
            "description": entry.description,
            "code_diff": entry.code_diff,
            "readme": entry.readme,
            "source_adapter": source,
        },
    )
