"""
Future Letters: letters to your future self.

Application package root. A modular monolith using hexagonal
architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - letters: Letter scheduling, sealed delivery, reflections, goals.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), policies.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (document store, AI service) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
