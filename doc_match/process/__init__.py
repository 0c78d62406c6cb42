# Path: doc_match/process/__init__.py
"""
Process Layer for doc_match (Document Reference Matching)

The PROCESS layer handles all matching operations:
- matcher/ - Scoring, learning, context, series detection and the ledger

All components follow the IPO pattern:
- Read from INPUT layer (loaders)
- Process data (scoring, learning, matching)
- Prepare for OUTPUT layer (exporters)
"""
