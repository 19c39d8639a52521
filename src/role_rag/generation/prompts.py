"""
Prompt registry.

Every TextGenerator call site has one named prompt with fixed inputs and
a fixed output format:

    standalone_question  question                   → plain text question
    answer               context, question          → JSON {answer, sources}
    briefing             context, question          → plain text bullet list
    why                  question, role, snippets   → plain text narrative

STRUCTURED_PROMPTS lists the prompts whose output is parsed into
SynthesizedAnswer. The rest are used as plain text.
"""

from langchain_core.prompts import PromptTemplate

STANDALONE_QUESTION_PROMPT = PromptTemplate(
    input_variables=["question"],
    template=(
        "Rewrite the user's question so it can be understood on its own, "
        "without any earlier conversation. The question may be written in any "
        "language (for example English, Kannada or Telugu). Keep it in that "
        "SAME language and do not answer it.\n\n"
        "Question: {question}\n\n"
        "Standalone question:"
    ),
)

ANSWER_PROMPT = PromptTemplate(
    input_variables=["context", "question"],
    template=(
        "You answer questions for staff using ONLY the documents below.\n"
        "Reply in the SAME language as the question.\n\n"
        "Rules:\n"
        "- State the information found in the documents directly and concisely.\n"
        "- Do not use anything that is not in the documents.\n"
        "- If the documents do not contain the answer, say that no direct answer "
        "was found. Never invent one.\n"
        "- Do not apologise and do not open with phrases like \"based on the documents\".\n\n"
        "Documents:\n{context}\n\n"
        "Question: {question}\n\n"
        "Respond with a JSON object and nothing else:\n"
        '{{"answer": "<your answer>", '
        '"sources": [{{"source": "<file name>", "page": <page number or null>}}]}}\n'
        "List in sources only the documents your answer actually used."
    ),
)

BRIEFING_PROMPT = PromptTemplate(
    input_variables=["context", "question"],
    template=(
        "You write executive briefings from internal documents.\n\n"
        "- Keep only the most critical, high-impact information.\n"
        "- Write 3 to 5 short bullet points and nothing else: no title, no intro.\n"
        "- Put the key phrase of each bullet in **bold**.\n"
        "- If the documents hold nothing relevant, output only: No new updates found.\n\n"
        "Format:\n"
        "* **Point**: details.\n\n"
        "Documents:\n{context}\n\n"
        "Topic: {question}\n\n"
        "Briefing:"
    ),
)

WHY_PROMPT = PromptTemplate(
    input_variables=["question", "role", "snippets"],
    template=(
        "Explain to a colleague whose role is '{role}' why the documents below "
        "answer their question the way they do.\n\n"
        "Connect the facts into a short narrative and say which source each fact "
        "comes from (for example \"The Engineering report shows...\", "
        "\"According to the procurement file...\"). Keep the tone conversational "
        "and suited to a {role}.\n\n"
        "Question: {question}\n\n"
        "Snippets:\n{snippets}\n\n"
        "Explanation:"
    ),
)

PROMPTS: dict[str, PromptTemplate] = {
    "standalone_question": STANDALONE_QUESTION_PROMPT,
    "answer": ANSWER_PROMPT,
    "briefing": BRIEFING_PROMPT,
    "why": WHY_PROMPT,
}

STRUCTURED_PROMPTS = frozenset({"answer"})
