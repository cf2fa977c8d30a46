# Constants for recommendation, classification and the assistant.
RECOMMEND_LIMIT = 8  # Max products returned by the preference recommender

# Eco preference -> minimal eco_score. Missing keys mean "no eco filter".
ECO_HIGH = "high"
ECO_MEDIUM = "medium"
ECO_THRESHOLDS = {ECO_HIGH: 8.0, ECO_MEDIUM: 5.0}

# Classifier heuristic weights (hit, miss)
TAG_MATCH_SCORES = (0.8, 0.2)
NAME_MATCH_SCORES = (0.9, 0.1)

# Assistant
ASSISTANT_PICKS = 3  # Products listed per assistant answer
ECO_KEYWORDS = ("sustainable", "eco")
