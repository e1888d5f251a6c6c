"""commitfeed default configuration file

Every configuration element ever used in the program must exist here.
These defaults may be overridden in the user's config file.

The variables guaranteed to be available are set in config.environ()
"""


# Base URL of the GitHub REST API
api_endpoint = 'https://api.github.com'

# Base URL of the GitHub web pages; derived from api_endpoint when empty
web_endpoint = ''

# Commit sort order: 'asc' for oldest first, anything else for newest first
sort_order = 'desc'

# Number of months of activity to retrieve
months_back = 1

# Output format: 'console', 'csv' or 'json'
output_type = 'console'

# Output files used when none is given on the command line
csv_output_file = 'output.csv'
json_output_file = 'output.json'

# Timeout in seconds for each HTTP request
request_timeout = 10

# Media type that makes the commit pull requests endpoint available
pr_media_type = 'application/vnd.github.groot-preview+json'

# Which commits get PR lookups after each page of events: 'all' looks up every commit found so
# far (so earlier commits are looked up again on every page), 'new' only those on the new page
pr_enrich_scope = 'all'

# Commit messages longer than this are truncated in console output
console_message_width = 50
