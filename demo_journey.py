#!/usr/bin/env python3
"""
Complete Pipeline Demo: Build → Validate → Navigate → Analyze → Diagrams

Shows the full workflow on the example project:
1. Build the example project
2. Validate it (shape and project-wide integrity)
3. Walk the journey for one user's answers
4. Analyze the journey
5. Generate Graphviz diagrams and a YAML export
"""

import logging

from govproto.analyzer import analyze_project
from govproto.backends import DotMode, save_dot_file
from govproto.examples import build_example_project, example_data_model
from govproto.navigation import walk_journey
from govproto.serialization import project_to_yaml
from govproto.validation import validate_project


def print_report(report):
    """Pretty-print a JourneyReport."""
    print()
    print("=" * 70)
    print(f"JOURNEY ANALYSIS REPORT: {report.project_name}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Pages:           {report.total_pages}")
    print(f"  Total Fields:          {report.total_fields}")
    print(f"  Total Conditions:      {report.total_conditions}")
    for page_type, count in sorted(report.pages_by_type.items()):
        print(f"    {page_type}: {count}")
    print()

    print("📈 ANSWER ANALYSIS")
    print(f"  Answers Referenced:    {len(report.variable_usage)}")
    print(f"  Uncollected Answers:   {report.uncollected_variables or 'None'}")
    print(f"  Unused Choice Fields:  {report.unused_choice_fields or 'None'}")
    print()

    print("🔗 GRAPH STRUCTURE")
    print(f"  Start Pages:           {report.start_pages}")
    print(f"  Exit Points:           {report.exit_points}")
    print(f"  Unreachable Pages:     {report.unreachable_pages or 'None'}")
    print(f"  Has Cycles:            {'YES' if report.has_cycles else 'NO'}")
    if report.has_cycles and report.cycle_example:
        print(f"    Example: {' -> '.join(report.cycle_example)}")
    print()

    print("📐 CONDITION COMPLEXITY")
    print(f"  Max Condition Depth:   {report.max_condition_depth}")
    print(f"  Avg Condition Depth:   {report.avg_condition_depth:.2f}")
    print(f"  Total Condition Nodes: {report.total_condition_nodes}")
    print(f"  Max Conditions/Page:   {report.max_conditions_per_page}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Journey looks clean!")
    print()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Build → Validate → Navigate → Analyze → Diagrams")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build
    # =========================================================================
    print("\n1. BUILDING PROJECT...")
    project = build_example_project()
    print(f"   ✓ Project: {project.name}")
    print(f"   ✓ Pages: {len(project.pages)}")

    # =========================================================================
    # STEP 2: Validate
    # =========================================================================
    print("\n2. VALIDATING...")
    result = validate_project(project)
    if result.success:
        print("   ✓ Project is valid")
    else:
        for issue in result.errors:
            print(f"   ✗ {issue.location()}: {issue.message}")

    # =========================================================================
    # STEP 3: Navigate
    # =========================================================================
    print("\n3. WALKING THE JOURNEY...")
    journey = walk_journey(project, example_data_model())
    print("   " + " -> ".join(page.key for page in journey))

    # =========================================================================
    # STEP 4: Analyze
    # =========================================================================
    print("\n4. ANALYZING...")
    report = analyze_project(project)
    print_report(report)

    # =========================================================================
    # STEP 5: Diagrams and export
    # =========================================================================
    print("5. GENERATING DIAGRAMS...")
    for mode in (DotMode.SIMPLE, DotMode.DETAILED, DotMode.MANAGEMENT):
        filename = f"journey_{mode.value}.dot"
        save_dot_file(project, filename, mode=mode)
        print(f"   ✓ {filename}")

    with open("example_project_output.yaml", "w") as f:
        f.write(project_to_yaml(project))
    print("   ✓ example_project_output.yaml")

    print("\nRender with: dot -Tpng journey_detailed.dot -o journey.png")


if __name__ == "__main__":
    main()
