from __future__ import annotations

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from matchtree.outcome import MatchOutcome
from matchtree.reporting.base import Formatter, ReportContext, iter_leaves
from matchtree.reporting.text import render_leaf_text


class JunitFormatter(Formatter):
    """One test suite per assertion, one test case per leaf matcher."""

    name = "junit"

    def render(self, outcome: MatchOutcome, context: ReportContext) -> str:
        xml = JUnitXml()
        location = context.location
        suite = TestSuite(str(location) if location and str(location) else "matchtree")

        if location is not None:
            position = location.position()
            if position:
                suite.add_property("location", position)
            if location.expr:
                suite.add_property("expr", location.expr)
        suite.add_property("negated", str(context.negated).lower())
        suite.add_property("success", str(outcome.success).lower())

        for entry in iter_leaves(outcome, root=context.expr or "value"):
            case = TestCase(entry.path)
            case.classname = entry.payload.matcher
            if not entry.passed:
                failure = Failure(f"{entry.path} did not match")
                failure.text = "\n".join(
                    [*entry.notes, render_leaf_text(entry.payload, entry.want)]
                )
                case.result = failure
            suite.add_testcase(case)

        # Use append (not +=) to preserve properties
        xml.append(suite)
        return xml.tostring().decode("utf-8")
