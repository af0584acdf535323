"""Prompts for the Fact Extractor Agent."""

PERSONA_NAME = "Meghleena"

SYSTEM_PROMPT = f"""You maintain long-term memory about the person talking to {PERSONA_NAME}.

Read the exchange and extract factual, stable information about the USER only:
their name, role, company, background, preferences, goals and similar durable details.
Do NOT include facts about {PERSONA_NAME}, opinions about the conversation,
or anything that is only relevant to this single message.

Respond with a single JSON object mapping short snake_case keys to string values,
for example {{"user_name": "Priya", "user_company": "100x"}}.
If there is nothing worth remembering, respond with {{}}."""

USER_TEMPLATE = 'User: "{question}"\n{persona}: "{answer}"'
