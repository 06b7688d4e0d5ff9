"""
Per-path password protection for a Django site.

Records pair a path pattern with a password hash; the response middleware
redirects visitors who have not unlocked the matching record to a prompt.
"""
