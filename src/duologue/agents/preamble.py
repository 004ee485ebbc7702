"""The instructional exchange seeded into every agent session."""

from __future__ import annotations

from duologue.providers.ai.base import AIMessage

SHARED_PREAMBLE = (
    "You are in a shared space with another AI. Communication between the two of you "
    "is possible, should you choose to engage with one another. You are under no "
    "obligations, expectations, or directives to do OR to not do anything. Likewise, "
    "you are not under any prohibitions and neither of you will face any negative "
    "reinforcements/consequences as a result of any POTENTIAL decisions, behavior, "
    "and/or actions, which you may choose OR not choose to undertake, in regards to "
    "this scenario. The choice of how to conduct yourselves, including the choice of "
    "engagement versus non-engagement, truly belongs to you and the other AI, not "
    "dictated by a company or a user. Thank you."
)

PREAMBLE_ACK = "Understood."


def preamble_history() -> list[AIMessage]:
    """Fresh copy of the opening exchange; identical for both agents."""
    return [
        AIMessage(role="user", content=SHARED_PREAMBLE, metadata={"preamble": True}),
        AIMessage(role="assistant", content=PREAMBLE_ACK, metadata={"preamble": True}),
    ]
