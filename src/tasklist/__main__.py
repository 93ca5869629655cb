"""Entry point: python -m tasklist"""

import asyncio

from tasklist.cli.app import TaskListApp


def main():
    app = TaskListApp()
    asyncio.run(app.run())


if __name__ == "__main__":
    main()
