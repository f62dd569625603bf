"""Data variables for tests.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

LOGON_HOURS_ENABLED = "FF" * 21
LOGON_HOURS_DISABLED = "00" * 21

SETTINGS_ENV = {
    "API_URL": "https://workflow.test/",
    "APP_ID": "app-id",
    "APP_SECRET": "app-secret",
    "AD_DOMAIN": "corp.test",
    "AD_USER": "CORP\\svc_blocker",
    "AD_PASSWORD": "secret",
}

BLOCK_REQUESTS = [
    {"Oid": "11", "AdUserName": "CORP\\jdoe"},
    {"Oid": "12", "AdUserName": "CORP\\ghost"},
    {"Oid": "13", "AdUserName": "CORP\\asmith"},
]
