"""Mutation testing analysis.

Wraps ``mutmut`` results and maps surviving mutants back to missing
test scenarios.

Workflow::

    pip install -e ".[test,mutation]"
    mutmut run                      # configured in pyproject.toml
    python -m validation.mutation_analysis

The goal: every mutant of ``num.py`` should be *killed* by at least one
test.  Surviving mutants reveal concrete gaps in test coverage.
"""
from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from typing import Callable

# mutmut status label -> MutationReport counter
_STATUS_FIELDS = {
    "killed": "killed",
    "survived": "survived",
    "timeout": "timeout",
    "suspicious": "suspicious",
    "no tests": "no_tests",
}
# any other label (not checked, skipped, segfault, ...) counts as "other"


@dataclass
class Mutant:
    name: str
    status: str          # mutmut label, e.g. killed | survived | not checked
    description: str = ""


@dataclass
class MutationReport:
    total: int = 0
    killed: int = 0
    survived: int = 0
    timeout: int = 0
    suspicious: int = 0
    no_tests: int = 0
    other: int = 0
    survivors: list[Mutant] = field(default_factory=list)

    @property
    def score(self) -> float:
        if self.total == 0:
            return 0.0
        return self.killed / self.total

    def summary(self) -> str:
        lines = [
            "Mutation Testing Report",
            "=" * 40,
            f"Total mutants:   {self.total}",
            f"Killed:          {self.killed}",
            f"Survived:        {self.survived}",
            f"Timeout:         {self.timeout}",
            f"Suspicious:      {self.suspicious}",
            f"No tests:        {self.no_tests}",
            f"Other:           {self.other}",
            f"Mutation score:  {self.score:.1%}",
        ]
        if self.survivors:
            lines.append("")
            lines.append("Surviving mutants (test gaps):")
            for m in self.survivors:
                lines.append(f"  [{m.name}]")
                if m.description:
                    lines.append(f"       {m.description}")
                lines.append(
                    "       -> Add a test that detects this mutation"
                )
        elif self.killed == self.total:
            lines.append("\nAll mutants killed — test suite is thorough.")
        return "\n".join(lines)


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, cwd=".")


def parse_results(output: str) -> list[Mutant]:
    """Parse ``mutmut results --all true`` lines of the form ``name: status``."""
    mutants: list[Mutant] = []
    for line in output.strip().splitlines():
        line = line.strip()
        if ":" not in line:
            continue
        name, status = (part.strip() for part in line.rsplit(":", 1))
        if status in _STATUS_FIELDS or "__mutmut_" in name:
            mutants.append(Mutant(name=name, status=status))
    return mutants


def build_report(
    mutants: list[Mutant],
    show: Callable[[str], str] | None = None,
) -> MutationReport:
    """Tally mutants; ``show`` fetches the diff for each survivor."""
    report = MutationReport()
    for m in mutants:
        attr = _STATUS_FIELDS.get(m.status, "other")
        setattr(report, attr, getattr(report, attr) + 1)
        if m.status == "survived":
            if show is not None:
                m.description = show(m.name)[:200]
            report.survivors.append(m)
    report.total = len(mutants)
    return report


def parse_mutmut_results() -> MutationReport:
    """Run ``mutmut results`` and build a structured report."""
    try:
        result = _run(["mutmut", "results", "--all", "true"])
    except FileNotFoundError:
        print("mutmut not installed.  Install with: pip install mutmut")
        sys.exit(1)

    def show(name: str) -> str:
        return _run(["mutmut", "show", name]).stdout.strip()

    return build_report(parse_results(result.stdout), show)


def main() -> None:
    print("Analyzing mutation testing results ...\n")
    report = parse_mutmut_results()
    print(report.summary())

    if report.total == 0:
        print("\nNo mutmut results found.  Run mutmut first:")
        print("  mutmut run")
        sys.exit(1)

    if report.score < 1.0:
        print("\nTarget:  100% mutation score")
        print(f"Current: {report.score:.1%}")
        print(
            f"Action:  Add tests for the {report.total - report.killed} "
            f"mutant(s) not killed"
        )
        sys.exit(1)
    else:
        print("\nMutation score target met!")


if __name__ == "__main__":
    main()
