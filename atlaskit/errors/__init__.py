"""Error containers with details and field errors, conditions, context helpers and rule-based mapping."""