"""Example rules for a theoretical SEO system."""

from rich.console import Console

from nighthawk.facts import BAD_BACKLINK
from nighthawk.rules.actions import ReportAction
from nighthawk.rules.conditions import Condition, ConditionType
from nighthawk.rules.engine import Rule, RuleEngine

INTRO = """
About to run three example rules for a theoretical
SEO system. The rules do the following:
 - checks for a known bad source for a backlink
 - checks for meeting a minimum number of backlinks
 - checks for meeting a minimum number of internal links
"""

MIN_BACKLINKS = 17
MIN_INTERNAL_LINKS = 37


def seo_rules(console: Console | None = None) -> list[Rule]:
    """Build the example SEO rules."""
    return [
        Rule.define(
            "bad_source_for_backlink",
            [Condition(fact="backlink", type=ConditionType.EQUALS, value=BAD_BACKLINK)],
            [ReportAction("found bad backlink", console=console)],
        ),
        Rule.define(
            "not_enough_backlinks",
            [
                Condition(
                    fact="backlink_count", type=ConditionType.LESS_THAN, value=MIN_BACKLINKS
                )
            ],
            [ReportAction("not enough backlinks", console=console)],
        ),
        Rule.define(
            "not_enough_internal_links",
            [
                Condition(
                    fact="internal_link_count",
                    type=ConditionType.LESS_THAN,
                    value=MIN_INTERNAL_LINKS,
                )
            ],
            [ReportAction("not enough internal links", console=console)],
        ),
    ]


def seo_engine(console: Console | None = None) -> RuleEngine:
    """Registry holding the example SEO rules."""
    return RuleEngine(seo_rules(console=console))
