#This file is for development purposes only

import logging

from bugzilla_client_impl import BugSearch, GetBug, get_client
from bugzilla_client_interface import BugzillaError


def main():
    logging.basicConfig(level=logging.DEBUG)
    client = get_client(interactive=True)

    print("\nFetching bug 1...")
    try:
        bug = client.execute_method(GetBug(1)).bug
        print(f"- {bug}")
        if bug is not None:
            print(f"  product: {bug.product}  component: {bug.component}  priority: {bug.priority}")
    except BugzillaError as e:
        print(f"Error connecting to Bugzilla: {e}")

    print("\nSearching open bugs...")
    try:
        search = client.execute_method(BugSearch(status="NEW"))
        for bug in search.search_results[:5]:
            print(f"- {bug}")
    except BugzillaError as e:
        print(f"Error connecting to Bugzilla: {e}")

if __name__ == "__main__":
    main()
