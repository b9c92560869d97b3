"""Design pattern catalogue used by the explain-pattern tool."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from code_mentor.domain.exceptions import ValidationError
from code_mentor.domain.result import Failure, Result, Success


@dataclass(frozen=True, slots=True)
class PatternExplanation:
    name: str
    description: str
    problem: str
    solution: str
    benefits: tuple[str, ...]
    example: str
    usage: str
    antipatterns: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "problem": self.problem,
            "solution": self.solution,
            "benefits": list(self.benefits),
            "example": self.example,
            "usage": self.usage,
            "antipatterns": list(self.antipatterns),
        }


CATALOG: MappingProxyType[str, PatternExplanation] = MappingProxyType(
    {
        "repository": PatternExplanation(
            name="Repository Pattern",
            description="Abstracts data access behind a uniform interface, whatever the data source.",
            problem="Business logic is coupled directly to APIs, databases or browser storage.",
            solution="Define an interface for data access and implement it per data source.",
            benefits=(
                "Better testability with fakes",
                "Separation of responsibilities",
                "Freedom to change the data source",
            ),
            example="""\
interface IUserRepository {
  findById(id: string): Promise<User>;
  save(user: User): Promise<User>;
}

class ApiUserRepository implements IUserRepository {
  constructor(private httpClient: HttpClient) {}
  findById(id: string) { return this.httpClient.get<User>(`/users/${id}`); }
  save(user: User) { return this.httpClient.post<User>('/users', user); }
}

class GetUserUseCase {
  constructor(private users: IUserRepository) {}
  execute(id: string) { return this.users.findById(id); }
}""",
            usage="Use it whenever data access should be abstracted to make code testable.",
            antipatterns=(
                "Calling fetch/axios directly from components",
                "Mixing business logic with data access",
                "Overly generic repositories",
            ),
        ),
        "factory": PatternExplanation(
            name="Factory Pattern",
            description="Creates objects without naming the concrete class at the call site.",
            problem="Different object types must be created depending on runtime conditions.",
            solution="Encapsulate creation in a factory that returns a common interface.",
            benefits=(
                "Callers are decoupled from concrete classes",
                "New types are added in one place",
                "Fewer scattered `new` calls",
            ),
            example="""\
interface Notification { send(message: string): void; }

class NotificationFactory {
  static create(type: 'email' | 'sms'): Notification {
    switch (type) {
      case 'email': return new EmailNotification();
      case 'sms': return new SMSNotification();
    }
  }
}""",
            usage="Use it when several related classes are chosen between at runtime.",
            antipatterns=("Factories for trivial objects", "Factories without a shared interface"),
        ),
        "strategy": PatternExplanation(
            name="Strategy Pattern",
            description="Defines a family of interchangeable algorithms behind one interface.",
            problem="Long if/else or switch chains select behaviour by a type tag.",
            solution="Move each branch into its own strategy object and inject the one you need.",
            benefits=("Open for extension, closed for modification", "Each algorithm is tested alone"),
            example="""\
interface DiscountStrategy { calculate(amount: number): number; }
class PremiumDiscount implements DiscountStrategy {
  calculate(amount: number) { return amount * 0.1; }
}
class Checkout {
  constructor(private discount: DiscountStrategy) {}
  total(amount: number) { return amount - this.discount.calculate(amount); }
}""",
            usage="Use it when behaviour varies by case and new cases keep appearing.",
            antipatterns=("A strategy per trivial branch",),
        ),
        "observer": PatternExplanation(
            name="Observer Pattern",
            description="Lets subscribers react to changes of a subject without tight coupling.",
            problem="Several parts of the app must react when some state changes.",
            solution="The subject keeps a list of observers and notifies them on change.",
            benefits=("Loose coupling between publisher and subscribers", "Subscribers added at runtime"),
            example="""\
class CartSubject {
  private observers = new Set<(items: Item[]) => void>();
  subscribe(fn: (items: Item[]) => void) { this.observers.add(fn); return () => this.observers.delete(fn); }
  notify(items: Item[]) { this.observers.forEach((fn) => fn(items)); }
}""",
            usage="Use it for event-driven updates across independent components.",
            antipatterns=("Forgetting to unsubscribe", "Cascading notifications that are hard to trace"),
        ),
        "singleton": PatternExplanation(
            name="Singleton Pattern",
            description="Guarantees a single instance of a class with a global access point.",
            problem="Exactly one shared instance of a resource is needed.",
            solution="Hide the constructor and expose a static accessor.",
            benefits=("Controlled access to a shared resource",),
            example="""\
class Config {
  private static instance: Config;
  private constructor() {}
  static getInstance(): Config {
    return (Config.instance ??= new Config());
  }
}""",
            usage="Prefer dependency injection; reserve Singleton for true process-wide resources.",
            antipatterns=("Hidden global state", "Singletons that make tests order-dependent"),
        ),
        "adapter": PatternExplanation(
            name="Adapter Pattern",
            description="Converts the interface of an external component into the one your code expects.",
            problem="A third-party API does not match the interface the domain defines.",
            solution="Wrap it in an adapter that implements the domain interface.",
            benefits=("Third-party code is isolated at the edge", "Vendors can be swapped"),
            example="""\
interface Logger { info(message: string): void; }
class SentryLoggerAdapter implements Logger {
  constructor(private sentry: SentryClient) {}
  info(message: string) { this.sentry.captureMessage(message, 'info'); }
}""",
            usage="Use it at every integration point with external libraries or APIs.",
            antipatterns=("Adapters that leak vendor types",),
        ),
        "builder": PatternExplanation(
            name="Builder Pattern",
            description="Constructs complex objects step by step.",
            problem="Constructors with many optional parameters are hard to read and misuse.",
            solution="Provide a builder with fluent setters and a final build step.",
            benefits=("Readable construction", "Validation in one place before the object exists"),
            example="""\
const request = new RequestBuilder()
  .url('/users')
  .method('POST')
  .header('Content-Type', 'application/json')
  .body(user)
  .build();""",
            usage="Use it for objects with many optional parts or multi-step construction.",
            antipatterns=("Builders for objects with two fields",),
        ),
        "command": PatternExplanation(
            name="Command Pattern",
            description="Encapsulates an action as an object.",
            problem="Actions must be queued, logged, retried or undone.",
            solution="Represent each action as a command object with an execute method.",
            benefits=("Undo and redo", "Actions can be queued or replayed"),
            example="""\
interface Command { execute(): void; undo(): void; }
class AddItemCommand implements Command {
  constructor(private cart: Cart, private item: Item) {}
  execute() { this.cart.add(this.item); }
  undo() { this.cart.remove(this.item.id); }
}""",
            usage="Use it for undoable actions and handler registries.",
            antipatterns=("Commands that reach into global state",),
        ),
        "dependency-injection": PatternExplanation(
            name="Dependency Injection",
            description="Supplies an object's collaborators from the outside instead of creating them inside.",
            problem="Classes construct their own dependencies with `new`, which couples them to concretions.",
            solution="Receive dependencies through the constructor and wire them in a composition root.",
            benefits=("Swappable implementations", "Isolated unit tests", "Explicit dependency graph"),
            example="""\
class CreateUserUseCase {
  constructor(private users: IUserRepository, private mailer: IMailer) {}
}

// composition root
const useCase = new CreateUserUseCase(new ApiUserRepository(http), new SmtpMailer(config));""",
            usage="Use it everywhere a class depends on infrastructure.",
            antipatterns=("Service locators hidden inside classes", "Injecting more than a class needs"),
        ),
    }
)

_SUFFIX_RE = re.compile(r"[\s_-]*pattern$")


def normalize_name(name: str) -> str:
    key = _SUFFIX_RE.sub("", name.strip().lower())
    return re.sub(r"[\s_]+", "-", key)


def available_patterns() -> list[str]:
    return sorted(CATALOG)


def explain(name: str) -> Result[PatternExplanation]:
    """Look up a pattern; unknown names yield a Failure listing what exists."""
    entry = CATALOG.get(normalize_name(name))
    if entry is None:
        available = available_patterns()
        return Failure(
            ValidationError(
                f"Pattern '{name}' not found. Available patterns: {', '.join(available)}",
                details={"available": available},
            )
        )
    return Success(entry)
