"""
civic_triage API Module

Stateless FastAPI surface over the scoring engine:
- Issue classification and submission enrichment
- Status transitions
- Dashboard optimizer and insights

Callers supply the issue collections; nothing is persisted here.
"""
