"""Rules flagging violations of the SOLID principles."""

from __future__ import annotations

import re

from code_mentor.domain.entities import Rule, Severity

CATEGORY = "solidPrinciples"

SRP_VIOLATION = Rule(
    rule_id="srp-violation",
    category=CATEGORY,
    scope=re.compile(
        r"class\s+\w+(?:\s*<[^{}]*?>)?(?:\s+extends\s+[\w.]+(?:<[^{}]*?>)?)?"
        r"(?:\s+implements\s+[\w.,\s<>]+?)?\s*\{"
    ),
    pattern=re.compile(r"fetch\(|console\.|localStorage\."),
    min_matches=2,
    issue="SRP violation (Single Responsibility Principle)",
    recommendation="This class has several responsibilities. Split them into separate classes",
    severity=Severity.CRITICAL,
    explanation=(
        "SRP: a class should have a single reason to change. A class that does "
        "HTTP, logging and storage has three."
    ),
    design_pattern="Single Responsibility Principle",
    code_example="""\
// Bad - several responsibilities
class UserService {
  async getUser(id: string) {
    console.log('Getting user...');
    const data = await fetch(`/api/users/${id}`);
    localStorage.setItem('user', JSON.stringify(data));
    return data;
  }
}

// Good - one responsibility each
class UserRepository {
  constructor(private httpClient: IHttpClient) {}
  getById(id: string): Promise<User> {
    return this.httpClient.get(`/users/${id}`);
  }
}
class UserCache {
  set(user: User): void { localStorage.setItem('user', JSON.stringify(user)); }
}""",
)

OCP_VIOLATION = Rule(
    rule_id="ocp-violation",
    category=CATEGORY,
    pattern=re.compile(
        r"if\s*\([^)]*===\s*['\"][^'\"]+['\"]\)\s*\{[^}]*return[^}]*\}\s*else\s*if"
    ),
    issue="Possible OCP violation (Open/Closed Principle)",
    recommendation="Consider the Strategy pattern or polymorphism for extensibility",
    severity=Severity.MEDIUM,
    explanation=(
        "OCP: classes should be open for extension and closed for modification. "
        "Chains of if/else on a type tag mean every new case edits this code."
    ),
    design_pattern="Strategy Pattern",
    code_example="""\
// Bad
function calculateDiscount(customerType: string, amount: number) {
  if (customerType === 'regular') {
    return amount * 0.05;
  } else if (customerType === 'premium') {
    return amount * 0.10;
  }
}

// Good
interface DiscountStrategy { calculate(amount: number): number; }
class DiscountCalculator {
  constructor(private strategy: DiscountStrategy) {}
  calculate(amount: number): number { return this.strategy.calculate(amount); }
}""",
)

ISP_VIOLATION = Rule(
    rule_id="isp-violation",
    category=CATEGORY,
    pattern=re.compile(r"interface\s+\w+\s*\{[^}]{200,}\}"),
    issue="Very large interface - possible ISP violation",
    recommendation="Split it into smaller, role-specific interfaces (Interface Segregation Principle)",
    severity=Severity.MEDIUM,
    explanation=(
        "ISP: clients should not depend on methods they do not use. Large "
        "interfaces force implementers to stub out irrelevant members."
    ),
    design_pattern="Interface Segregation Principle",
)

DIRECT_INSTANTIATION = Rule(
    rule_id="direct-instantiation",
    category=CATEGORY,
    pattern=re.compile(r"new\s+\w+\([^)]*\)\s*(?!.*inject|provide)"),
    issue='Direct instantiation with "new"',
    recommendation="Use Dependency Injection to invert the dependency (DIP)",
    severity=Severity.HIGH,
    explanation=(
        "DIP: depend on abstractions, not concretions. Inject collaborators "
        "instead of constructing them."
    ),
    design_pattern="Dependency Injection Pattern",
    code_example="""\
// Bad
class UserController {
  private repository = new UserApiRepository();
}

// Good
class UserController {
  constructor(private repository: IUserRepository) {}
}""",
)

LSP_VIOLATION = Rule(
    rule_id="lsp-violation",
    category=CATEGORY,
    pattern=re.compile(
        r"class\s+\w+\s+extends\s+\w+\s*\{[^}]*throw\s+new\s+Error", re.DOTALL
    ),
    issue="Possible LSP violation (Liskov Substitution Principle)",
    recommendation="Subclasses must be usable wherever the base class is expected",
    severity=Severity.HIGH,
    explanation=(
        "LSP: a subclass that throws from an inherited method breaks callers "
        "written against the base class."
    ),
    design_pattern="Liskov Substitution Principle",
)

RULES: tuple[Rule, ...] = (
    SRP_VIOLATION,
    OCP_VIOLATION,
    ISP_VIOLATION,
    DIRECT_INSTANTIATION,
    LSP_VIOLATION,
)
