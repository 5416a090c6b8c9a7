import asyncio
import sys
from update_project.config import get_github_token, get_inputs
from update_project.github.client import GitHubClient
from update_project.runner import run
from update_project.utils.actions import get_exit_code, set_failed
from update_project.utils.logger import get_logger

logger = get_logger(__name__)


async def main():
    """メインエントリーポイント"""
    inputs = get_inputs()
    if inputs is None:
        return

    client = GitHubClient(get_github_token())

    logger.info(
        f"Project #{inputs.project_number} ({inputs.owner}), "
        f"field '{inputs.field_name}', operation {inputs.operation}"
    )
    await run(client, inputs)


def cli() -> int:
    """main()を実行し、終了コードを返す"""
    try:
        asyncio.run(main())
    except Exception as e:
        logger.debug(f"Run failed: {e}", exc_info=True)
        set_failed(str(e))

    return get_exit_code()


if __name__ == "__main__":
    sys.exit(cli())
