"""Static portfolio content shown next to the GitHub data."""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_site.domain.entities import Snapshot
from portfolio_site.infrastructure.config import Settings


@dataclass(frozen=True, slots=True)
class SkillLevel:
    skill: str
    percentage: int


@dataclass(frozen=True, slots=True)
class SkillCategory:
    title: str
    skills: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SocialLink:
    label: str
    url: str


@dataclass(frozen=True, slots=True)
class StatCard:
    label: str
    value: int


@dataclass(frozen=True, slots=True)
class Showcase:
    """Hand-written profile content: fallbacks for the identity plus skills."""

    name: str
    tagline: str
    bio: str
    resume_url: str | None = None
    skill_levels: tuple[SkillLevel, ...] = ()
    skill_categories: tuple[SkillCategory, ...] = ()
    tech_stack: tuple[str, ...] = ()
    social_links: tuple[SocialLink, ...] = ()

    def display_name(self, snapshot: Snapshot) -> str:
        if snapshot.identity and snapshot.identity.name:
            return snapshot.identity.name
        return self.name

    def display_bio(self, snapshot: Snapshot) -> str:
        if snapshot.identity and snapshot.identity.bio:
            return snapshot.identity.bio
        return self.bio

    def links_for(self, snapshot: Snapshot) -> list[SocialLink]:
        """Configured social links, with GitHub and email taken from the identity when known."""
        identity = snapshot.identity
        links = []
        for link in self.social_links:
            url = link.url
            if link.label == "GitHub" and identity and identity.html_url:
                url = identity.html_url
            elif link.label == "Email" and identity and identity.email:
                url = f"mailto:{identity.email}"
            if url:
                links.append(SocialLink(link.label, url))
        return links


DEFAULT_SKILL_LEVELS = (
    SkillLevel("Frontend Development", 85),
    SkillLevel("Backend Architecture", 90),
    SkillLevel("Blockchain Development", 80),
    SkillLevel("Mobile Development", 75),
)

DEFAULT_SKILL_CATEGORIES = (
    SkillCategory("Frontend", ("React", "Next.js", "TypeScript", "Tailwind CSS")),
    SkillCategory("Backend", ("Node.js", "Express", "MongoDB", "Firebase", "MySQL")),
    SkillCategory("Mobile", ("Flutter", "Dart")),
    SkillCategory("Blockchain", ("Solidity", "Ethereum", "Web3.js")),
    SkillCategory("DevOps", ("Render", "Vercel", "PM2", "CI/CD", "Nginx", "Docker")),
    SkillCategory("Tools", ("Git", "VS Code", "Postman", "GitHub Desktop")),
)

DEFAULT_TECH_STACK = ("JavaScript", "TypeScript", "React", "Node.js", "Solidity", "Flutter")


def build_showcase(settings: Settings) -> Showcase:
    return Showcase(
        name=settings.owner_name,
        tagline=settings.owner_tagline,
        bio=settings.owner_bio,
        resume_url=settings.resume_url,
        skill_levels=DEFAULT_SKILL_LEVELS,
        skill_categories=DEFAULT_SKILL_CATEGORIES,
        tech_stack=DEFAULT_TECH_STACK,
        social_links=(
            SocialLink("GitHub", settings.github_url or ""),
            SocialLink("LinkedIn", settings.linkedin_url or ""),
            SocialLink("Twitter", settings.twitter_url or ""),
            SocialLink(
                "Email", f"mailto:{settings.contact_email}" if settings.contact_email else ""
            ),
        ),
    )


def stat_cards(snapshot: Snapshot) -> list[StatCard]:
    """Headline numbers; all zero when the identity could not be fetched."""
    identity = snapshot.identity
    return [
        StatCard("Repositories", identity.public_repos if identity else 0),
        StatCard("Followers", identity.followers if identity else 0),
        StatCard("Total Commits", snapshot.total_commits),
        StatCard("Following", identity.following if identity else 0),
    ]
