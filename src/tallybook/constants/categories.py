"""
Default categories written to an empty category store.
Ids are fixed slugs so transactions recorded against defaults stay portable.
"""

# (id, name, icon, color)
INCOME_CATEGORIES = [
    ("salary", "Salary", "briefcase", "#16A34A"),
    ("bonus", "Bonus", "gift", "#22C55E"),
    ("investment", "Investment Income", "trending-up", "#15803D"),
    ("side-hustle", "Side Hustle", "tool", "#4ADE80"),
    ("other-income", "Other Income", "plus-circle", "#86EFAC"),
]

EXPENSE_CATEGORIES = [
    ("food", "Food", "coffee", "#F97316"),
    ("transport", "Transport", "truck", "#3B82F6"),
    ("shopping", "Shopping", "shopping-bag", "#EC4899"),
    ("housing", "Housing", "home", "#8B5CF6"),
    ("utilities", "Utilities", "zap", "#EAB308"),
    ("entertainment", "Entertainment", "film", "#06B6D4"),
    ("healthcare", "Healthcare", "heart", "#EF4444"),
    ("education", "Education", "book", "#6366F1"),
    ("other-expense", "Other Expense", "more-horizontal", "#9CA3AF"),
]
