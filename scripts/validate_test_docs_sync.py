#!/usr/bin/env python3
"""
Check that docs/test_scenarios_business_summary.md describes exactly the
scenarios in tests/test_integration_scenarios.py.

Each test method must be documented inside the section of its own test class.

Run: python scripts/validate_test_docs_sync.py
"""

import re
import sys
from pathlib import Path

CLASS_PATTERN = re.compile(r'\*\*Test Class\*\*:\s*`(Test\w+)`')
METHOD_PATTERN = re.compile(r'\*\*Test Method\*\*:\s*`(test_\w+)`')


def parse_scenario_tests(test_file: Path) -> dict[str, list[str]]:
    """Map each scenario class in the test module to its test methods."""
    scenarios: dict[str, list[str]] = {}
    current = None

    for line in test_file.read_text().splitlines():
        class_match = re.match(r'^class (Test\w+)', line)
        if class_match:
            current = class_match.group(1)
            scenarios[current] = []
            continue

        if current:
            method_match = re.match(r'^\s+def (test_\w+)', line)
            if method_match:
                scenarios[current].append(method_match.group(1))

    return scenarios


def parse_documented_scenarios(doc_file: Path) -> dict[str, list[str]]:
    """Map each documented class to the methods listed in its section."""
    documented: dict[str, list[str]] = {}
    current = None

    for line in doc_file.read_text().splitlines():
        class_match = CLASS_PATTERN.search(line)
        if class_match:
            current = class_match.group(1)
            documented.setdefault(current, [])
            continue

        method_match = METHOD_PATTERN.search(line)
        if method_match and current:
            documented[current].append(method_match.group(1))

    return documented


def compare(scenarios: dict[str, list[str]], documented: dict[str, list[str]]) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) describing the drift between tests and docs."""
    errors = []
    warnings = []

    for cls in sorted(set(scenarios) - set(documented)):
        errors.append(f"Scenario class not documented: {cls}")
    for cls in sorted(set(documented) - set(scenarios)):
        warnings.append(f"Documented class no longer exists: {cls}")

    for cls in sorted(set(scenarios) & set(documented)):
        for method in sorted(set(scenarios[cls]) - set(documented[cls])):
            errors.append(f"{cls}.{method} not documented under its class")
        for method in sorted(set(documented[cls]) - set(scenarios[cls])):
            warnings.append(f"{cls}.{method} documented but not tested")

    return errors, warnings


def main():
    project_root = Path(__file__).parent.parent
    test_file = project_root / 'tests' / 'test_integration_scenarios.py'
    doc_file = project_root / 'docs' / 'test_scenarios_business_summary.md'

    for path in (test_file, doc_file):
        if not path.exists():
            print(f"❌ File not found: {path}")
            sys.exit(1)

    scenarios = parse_scenario_tests(test_file)
    documented = parse_documented_scenarios(doc_file)
    errors, warnings = compare(scenarios, documented)

    print("=" * 60)
    print("Scenario Documentation Sync")
    print("=" * 60)
    print(f"\nScenario classes: {len(scenarios)}")
    print(f"Scenario methods: {sum(len(m) for m in scenarios.values())}")
    print(f"Documented classes: {len(documented)}")

    if errors:
        print(f"\n❌ ERRORS ({len(errors)}):")
        for error in errors:
            print(f"   - {error}")

    if warnings:
        print(f"\n⚠️  WARNINGS ({len(warnings)}):")
        for warning in warnings:
            print(f"   - {warning}")

    if not errors and not warnings:
        print("\n✅ Every scenario is documented")

    print("\nCoverage by scenario:")
    for cls, methods in sorted(scenarios.items()):
        listed = documented.get(cls, [])
        print(f"\n  {'✅' if cls in documented else '❌'} {cls}")
        for method in methods:
            print(f"      {'✅' if method in listed else '❌'} {method}")

    sys.exit(1 if errors else 0)


if __name__ == '__main__':
    main()
