"""
Services Package

Pure computation shared by the models. Nothing here touches the database
or HTTP layer, so every function can be tested with plain objects.

Current services:
- ladder.py: Threshold ladder scorer used by every score
- scoring.py: Review, reply and reaction scores
- report_scoring.py: Report risk, urgency, impact and confidence
- analytics_scoring.py: Daily analytics rates and scores
- sentiment.py: Reaction type to sentiment mapping and lookup tables
- content_metrics.py: Word count, character count, reading time
- validation.py: Error collector behind every validate()
- clock.py: Injectable time source
"""
