"""Classic design patterns (positive findings) and anti-patterns."""

from __future__ import annotations

import re

from code_mentor.domain.entities import Rule, Severity

DESIGN = "designPatterns"
ANTI = "antiPatterns"

DESIGN_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="factory-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+Factory"),
        issue="Factory pattern detected",
        recommendation="Using the Factory pattern for object creation",
        severity=Severity.GOOD,
        design_pattern="Factory Pattern",
        explanation="Factories encapsulate object creation and decouple callers from concrete types.",
    ),
    Rule(
        rule_id="observer-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+(?:Observer|Subject|Publisher)"),
        issue="Observer pattern detected",
        recommendation="Using the Observer pattern for communication",
        severity=Severity.GOOD,
        design_pattern="Observer Pattern",
        explanation="Observers are notified of changes automatically.",
    ),
    Rule(
        rule_id="strategy-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+Strategy"),
        issue="Strategy pattern detected",
        recommendation="Using the Strategy pattern for interchangeable algorithms",
        severity=Severity.GOOD,
        design_pattern="Strategy Pattern",
    ),
    Rule(
        rule_id="builder-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+Builder"),
        issue="Builder pattern detected",
        recommendation="Using the Builder pattern for step-by-step construction",
        severity=Severity.GOOD,
        design_pattern="Builder Pattern",
    ),
    Rule(
        rule_id="singleton-pattern",
        category=DESIGN,
        pattern=re.compile(
            r"class\s+\w+(?:Singleton|Instance)\s*\{[^}]*private\s+static[^}]*getInstance",
            re.DOTALL,
        ),
        issue="Singleton pattern detected",
        recommendation="Use Singleton with care - it makes testing harder",
        severity=Severity.MEDIUM,
        design_pattern="Singleton Pattern",
        explanation=(
            "A Singleton guarantees one instance but creates global state that "
            "is hard to replace in tests."
        ),
    ),
    Rule(
        rule_id="command-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+Command"),
        issue="Command pattern detected",
        recommendation="Using the Command pattern to encapsulate operations",
        severity=Severity.GOOD,
        design_pattern="Command Pattern",
    ),
    Rule(
        rule_id="adapter-pattern",
        category=DESIGN,
        pattern=re.compile(r"class\s+\w+Adapter"),
        issue="Adapter pattern detected",
        recommendation="Using the Adapter pattern to integrate external interfaces",
        severity=Severity.GOOD,
        design_pattern="Adapter Pattern",
    ),
)

ANTI_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="god-object",
        category=ANTI,
        pattern=re.compile(r"class\s+\w+\s*\{[\s\S]{1000,}\}"),
        issue="Very large class (God Object)",
        recommendation="Split the class into more specific responsibilities",
        severity=Severity.CRITICAL,
        design_pattern="Single Responsibility Principle",
        explanation="Oversized classes break single responsibility and are hard to maintain.",
    ),
    Rule(
        rule_id="nested-conditionals",
        category=ANTI,
        pattern=re.compile(
            r"if\s*\([^)]*\)\s*\{[^}]*if\s*\([^)]*\)\s*\{[^}]*if\s*\([^)]*\)\s*\{"
        ),
        issue="Spaghetti code with nested conditionals",
        recommendation="Use early returns or the Strategy pattern to reduce nesting",
        severity=Severity.HIGH,
        explanation="Deeply nested conditionals are hard to read and maintain.",
        code_example="""\
// Good - early returns
function processUser(user) {
  if (!user) return;
  if (!user.isActive) return;
  if (!user.hasPermission) return;
  // logic...
}""",
    ),
    Rule(
        rule_id="magic-values",
        category=ANTI,
        pattern=re.compile(r"\b\d{2,}\b(?![.]\d)|[\"']\w{10,}[\"']"),
        issue="Magic numbers/strings detected",
        recommendation="Use constants with descriptive names",
        severity=Severity.MEDIUM,
        explanation="Hard-coded values hide their purpose and are hard to change.",
    ),
)
