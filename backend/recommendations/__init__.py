"""
Recommendations Module Summary
==============================

This module ranks destinations (cities or whole countries) for the discovery pages.

Key Features Implemented:
1. ScoringService - feature based ranking (food price, attractions, hotels)
2. FeatureScorer - normalization and weighted composite scores
3. reduce_to_country - city rows aggregated into country rows
4. Sample attractions attached to the returned destinations in one batched query
5. City recommendation lists (top attractions, warm & budget)
6. REST API endpoints
"""
