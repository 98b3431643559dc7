"""
Maver Law Firm AI Grader

Backend for the law firm AI visibility grader:
1. Analyzes the firm website for on-page signals
2. Detects the practice area and target keywords
3. Synthesizes deterministic visibility scores against competitors
4. Adds insights and recommendations for the report
"""

__version__ = "1.0.0"
