# AutoApply UAE - Automated Job Application Platform
# Version 0.1.0

"""
AutoApply finds UAE jobs and emails applications with your CV attached.

Layers:
1. CV Parser - Extract profile fields from an uploaded CV
2. Discovery Agent - Search UAE job listings via JSearch
3. Composer - Guess employer addresses and write application emails
4. Dispatcher - Send applications one by one and report the results
"""

__version__ = "0.1.0"
