"""React, Next.js and front-end performance rules."""

from __future__ import annotations

import re

from code_mentor.domain.entities import Rule, Severity

REACT = "reactPatterns"
NEXTJS = "nextjsPatterns"
PERFORMANCE = "performancePatterns"

REACT_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="large-default-component",
        category=REACT,
        pattern=re.compile(r"export\s+default\s+function\s+\w+\([^)]*\)\s*\{[\s\S]{300,}\}"),
        issue="Very large component (>300 characters of body)",
        recommendation="Apply the Composite pattern and split into smaller components",
        severity=Severity.HIGH,
        explanation="Large components are hard to maintain and test. Prefer composition.",
        design_pattern="Composite Pattern",
        code_example="""\
// Good - small components
function UserDashboard() {
  return (
    <div>
      <UserHeader />
      <UserStats />
      <UserContent />
    </div>
  );
}""",
    ),
    Rule(
        rule_id="multiple-use-state",
        category=REACT,
        pattern=re.compile(
            r"useState\([^)]*\)[\s\S]{0,100}useState\([^)]*\)[\s\S]{0,100}useState"
        ),
        issue="Several related useState calls",
        recommendation="Consider useReducer or a custom hook (Facade pattern)",
        severity=Severity.MEDIUM,
        explanation="Several related pieces of state usually want a reducer or a consolidated state.",
        design_pattern="Facade Pattern / State Pattern",
        code_example="""\
// Bad
const [loading, setLoading] = useState(false);
const [error, setError] = useState(null);
const [data, setData] = useState(null);

// Good
const { data, loading, error } = useUserData(userId);""",
    ),
    Rule(
        rule_id="inline-object-prop",
        category=REACT,
        pattern=re.compile(r"<[A-Z][^>]*\s+\w+=\{\{[^}]+\}\}"),
        issue="Inline object passed as prop",
        recommendation="Use useMemo to avoid needless re-renders (memoization)",
        severity=Severity.HIGH,
        explanation="Inline objects create a new reference on every render.",
    ),
    Rule(
        rule_id="inline-handler-in-map",
        category=REACT,
        pattern=re.compile(r"\.map\([^)]*=>\s*<[^>]+onClick=\{[^}]*=>"),
        issue="Inline function inside map",
        recommendation="Use useCallback for list handlers (Command pattern)",
        severity=Severity.HIGH,
        design_pattern="Command Pattern",
    ),
    Rule(
        rule_id="props-drilling",
        category=REACT,
        pattern=re.compile(r"function\s+\w+\([^)]*\{\s*\w+,\s*\w+,\s*\w+,\s*\w+[^}]*\}"),
        issue="Possible props drilling",
        recommendation="Consider the Context API or shared state",
        severity=Severity.MEDIUM,
        explanation="Passing many props through a tree suggests the data belongs in a shared context.",
        design_pattern="Context Pattern",
    ),
    Rule(
        rule_id="effect-empty-deps",
        category=REACT,
        pattern=re.compile(r"useEffect\([^,]+,\s*\[\]\s*\)"),
        issue="useEffect with an empty dependency array",
        recommendation="Check it truly has no dependencies, or consider useMemo/useCallback",
        severity=Severity.LOW,
        explanation="Effects with empty dependencies only run on mount. Make sure that is intended.",
    ),
    Rule(
        rule_id="missing-list-key",
        category=REACT,
        pattern=re.compile(r"\.map\([^)]*=>\s*<[^>]*(?!.*key=)"),
        issue='Missing "key" prop on list items',
        recommendation='Give every list element a unique "key" prop',
        severity=Severity.MEDIUM,
        explanation='React needs "key" to reconcile lists efficiently.',
    ),
    Rule(
        rule_id="nested-ternary-render",
        category=REACT,
        pattern=re.compile(r"\{\s*\w+\s*\?\s*\w+\s*\?\s*.*:\s*.*:\s*.*\}"),
        issue="Complex conditional rendering",
        recommendation="Extract the conditional logic into a function or component",
        severity=Severity.MEDIUM,
        explanation="Nested ternaries are hard to read.",
    ),
)

NEXTJS_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="complex-server-side-props",
        category=NEXTJS,
        pattern=re.compile(r"export\s+async\s+function\s+getServerSideProps[\s\S]{200,}"),
        issue="getServerSideProps with complex logic",
        recommendation="Move the logic into separate services for easier testing",
        severity=Severity.MEDIUM,
        explanation="Next.js data functions should stay thin and delegate to services.",
    ),
    Rule(
        rule_id="api-route-without-error-handling",
        category=NEXTJS,
        pattern=re.compile(
            r"export\s+default\s+(?:async\s+)?function\s+handler\([^)]*\)\s*\{[^}]*(?!.*try.*catch)[^}]*\}",
            re.DOTALL,
        ),
        issue="API route without error handling",
        recommendation="Add try/catch and return proper HTTP error codes",
        severity=Severity.HIGH,
        explanation="API routes must fail gracefully with an appropriate status code.",
    ),
    Rule(
        rule_id="dynamic-import-without-lazy",
        category=NEXTJS,
        pattern=re.compile(r"import\([^)]+\)(?!.*lazy)"),
        issue="Dynamic import without lazy loading",
        recommendation="Consider React.lazy() for heavy components",
        severity=Severity.LOW,
        explanation="React.lazy() integrates with Suspense for heavy components.",
    ),
)

PERFORMANCE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="unoptimized-image",
        category=PERFORMANCE,
        pattern=re.compile(r"<img\s+[^>]*src=[\"'][^\"']*[\"'][^>]*(?!.*priority|.*loading)"),
        issue="Image without Next.js optimisation",
        recommendation="Use next/image for automatic optimisation",
        severity=Severity.MEDIUM,
        explanation="next/image adds lazy loading, resizing and better vitals.",
    ),
    Rule(
        rule_id="unoptimized-google-font",
        category=PERFORMANCE,
        pattern=re.compile(r"@import\s+url\(['\"]https://fonts\.googleapis\.com"),
        issue="Google Fonts loaded without optimisation",
        recommendation="Use next/font for automatic font optimisation",
        severity=Severity.MEDIUM,
        explanation="next/font removes the extra network round-trips.",
    ),
)
