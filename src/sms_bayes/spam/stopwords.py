# =============================================================================
# Stopword Filter
# =============================================================================
# Removes common English function words from raw message text.
#
# This is a SIDE CHANNEL. The filtered text is used for descriptive
# word-frequency reports only. The classifier builds its vocabulary from the
# original text through the tokenizer, stopwords included. Applying this
# filter to the model's training data would change every probability in the
# table, so the two paths stay separate.
#
# Matching is exact and case-sensitive on whitespace-split raw words, before
# any punctuation stripping: "the" is removed, "The" and "the," are kept.
# =============================================================================


# Standard English stop word list (the NLTK corpus list)
STOP_WORDS = frozenset([
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you",
    "you're", "you've", "you'll", "you'd", "your", "yours", "yourself",
    "yourselves", "he", "him", "his", "himself", "she", "she's", "her",
    "hers", "herself", "it", "it's", "its", "itself", "they", "them",
    "their", "theirs", "themselves", "what", "which", "who", "whom", "this",
    "that", "that'll", "these", "those", "am", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "having", "do", "does",
    "did", "doing", "a", "an", "the", "and", "but", "if", "or", "because",
    "as", "until", "while", "of", "at", "by", "for", "with", "about",
    "against", "between", "into", "through", "during", "before", "after",
    "above", "below", "to", "from", "up", "down", "in", "out", "on", "off",
    "over", "under", "again", "further", "then", "once", "here", "there",
    "when", "where", "why", "how", "all", "any", "both", "each", "few",
    "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "s", "t", "can", "will",
    "just", "don", "don't", "should", "should've", "now", "d", "ll", "m",
    "o", "re", "ve", "y", "ain", "aren", "aren't", "couldn", "couldn't",
    "didn", "didn't", "doesn", "doesn't", "hadn", "hadn't", "hasn",
    "hasn't", "haven", "haven't", "isn", "isn't", "ma", "mightn",
    "mightn't", "mustn", "mustn't", "needn", "needn't", "shan", "shan't",
    "shouldn", "shouldn't", "wasn", "wasn't", "weren", "weren't", "won",
    "won't", "wouldn", "wouldn't",
])


def remove_stopwords(text: str, stop_words: frozenset[str] = STOP_WORDS) -> str:
    """
    Drop stop words from text.

    Args:
        text: Raw message text.
        stop_words: Words to drop. Defaults to the English list.

    Returns:
        Remaining words joined by single spaces.

    Example:
        >>> remove_stopwords("Is   this the  real deal")
        'Is real deal'
    """
    return " ".join(word for word in text.split() if word not in stop_words)
