"""Fixed user-facing texts returned when the pipeline has nothing to say or fails."""

NO_ACCESS_ANSWER = "I don't have access to relevant documents for this question in your role."
ANSWER_ERROR = "I encountered an error processing your question. Please try again."
NO_DOCUMENTS_TO_EXPLAIN = "No documents were retrieved for analysis."
EXPLANATION_ERROR = "Error generating explanation."
BRIEFING_ITEM_ERROR = "Error generating briefing for this topic."
