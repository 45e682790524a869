"""
English stop words dropped from search keywords.

Only words that can pass the keyword length filters matter here (subject
words > 3 chars, sender words > 2, body words > 4), but short words are kept
so the list can be reused for other tokenizations.
"""

STOP_WORDS: frozenset[str] = frozenset(
    {
        # Articles, pronouns, determiners
        "the", "and", "for", "you", "your", "yours", "our", "ours", "their",
        "theirs", "they", "them", "these", "those", "this", "that", "there",
        "here", "which", "what", "whom", "whose", "who", "where", "when",
        "while", "with", "within", "without", "from", "into", "onto", "upon",
        "about", "above", "below", "after", "before", "again", "against",
        "between", "through", "during", "under", "over", "until", "among",
        "each", "every", "other", "another", "such", "some", "many", "much",
        "more", "most", "less", "least", "both", "either", "neither", "none",
        "any", "all", "few", "only", "own", "same", "than", "then", "very",
        "also", "just", "even", "still", "already", "always", "never", "ever",
        "itself", "myself", "yourself", "ourselves", "themselves", "himself",
        "herself", "his", "her", "hers", "him", "she", "its", "it's",
        # Auxiliaries and modals
        "are", "was", "were", "been", "being", "have", "has", "had", "having",
        "does", "did", "doing", "done", "will", "would", "shall", "should",
        "can", "could", "may", "might", "must", "cannot", "can't", "won't",
        "don't", "doesn't", "didn't", "isn't", "aren't", "wasn't", "weren't",
        "haven't", "hasn't", "hadn't", "wouldn't", "shouldn't", "couldn't",
        "i'm", "i've", "i'll", "i'd", "we're", "we've", "we'll", "you're",
        "you've", "you'll", "they're", "they've", "let's", "that's", "there's",
        # Conjunctions and adverbs
        "because", "since", "though", "although", "unless", "whether",
        "however", "therefore", "otherwise", "anyway", "really", "quite",
        "rather", "please", "thanks", "thank", "regards", "hello", "dear",
        "hi", "hey", "yes", "not", "nor", "but", "yet", "how", "why",
        "out", "off", "down", "further", "once", "too", "now", "well",
        # Email boilerplate
        "subject", "email", "e-mail", "message", "sent", "received",
        "forwarded", "original", "reply", "attached", "attachment", "best",
        "kind", "sincerely", "cheers", "fw", "fwd", "re",
    }
)
