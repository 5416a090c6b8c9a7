import requests
import asyncio
from typing import Dict, Any, Optional
from update_project.config import settings
from update_project.utils.logger import get_logger
from update_project.utils.retry import retry_with_backoff

logger = get_logger(__name__)


class GitHubAuthError(Exception):
    """GitHub認証エラー"""

    pass


class GitHubGraphQLError(Exception):
    """GraphQLレスポンスに含まれるエラー"""

    def __init__(self, errors: list):
        self.errors = errors
        messages = [err.get("message", "Unknown error") for err in errors]
        super().__init__(f"GraphQL errors: {', '.join(messages)}")


def graphql_endpoint(api_url: str) -> str:
    """REST APIのURLからGraphQLエンドポイントを求める

    GHESのREST APIは https://HOST/api/v3、GraphQLは https://HOST/api/graphql。

    Args:
        api_url: REST APIのベースURL

    Returns:
        str: GraphQLエンドポイントのURL
    """
    base = api_url.rstrip("/")
    if base.endswith("/v3"):
        base = base[: -len("/v3")]
    return f"{base}/graphql"


class GitHubClient:
    """GitHub GraphQL APIクライアント

    エントリーポイントで1回だけ生成し、各リゾルバに引数で渡す。
    """

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        if api_url:
            self.api_url = graphql_endpoint(api_url)
        else:
            self.api_url = settings.GITHUB_GRAPHQL_URL or graphql_endpoint(
                settings.GITHUB_API_URL
            )
        self.timeout = timeout or settings.GITHUB_API_TIMEOUT_SECONDS
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/vnd.github+json",
        }

    async def _post(self, payload: Dict[str, Any]) -> requests.Response:
        """GraphQLエンドポイントへ1回だけPOSTする"""
        # requestsは同期ライブラリなので、非同期コンテキストで実行
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: requests.post(
                self.api_url, json=payload, headers=self.headers, timeout=self.timeout
            ),
        )

    # 接続確立前の失敗のみ再送する（送信済みの可能性があるタイムアウトは対象外）
    @retry_with_backoff(
        max_retries=settings.GITHUB_API_MAX_RETRIES,
        retry_on=(requests.ConnectionError,),
    )
    async def _post_with_retry(self, payload: Dict[str, Any]) -> requests.Response:
        return await self._post(payload)

    async def execute_query(
        self, query: str, variables: Dict[str, Any] = None, retry: bool = True
    ) -> Dict[str, Any]:
        """GraphQLクエリを実行

        Args:
            query: GraphQLクエリ文字列
            variables: クエリ変数
            retry: 接続エラー時に再送するか（mutationではFalse）

        Returns:
            Dict[str, Any]: クエリ結果（dataフィールド）

        Raises:
            GitHubAuthError: 401/403の場合
            GitHubGraphQLError: レスポンスにerrorsが含まれる場合
            requests.HTTPError: その他のHTTPエラー
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        if retry:
            response = await self._post_with_retry(payload)
        else:
            response = await self._post(payload)

        if response.status_code in (401, 403):
            logger.error(f"GitHub API rejected credentials: HTTP {response.status_code}")
            raise GitHubAuthError(
                f"GitHub API rejected the token (HTTP {response.status_code})"
            )
        response.raise_for_status()

        data = response.json()
        errors = data.get("errors")
        if errors:
            # NOT_FOUNDのみで部分データがある場合は、null値として呼び出し側に判定させる
            if data.get("data") is not None and all(
                err.get("type") == "NOT_FOUND" for err in errors
            ):
                logger.warning(f"GraphQL NOT_FOUND: {errors}")
                return data["data"]

            logger.error(f"GraphQL errors: {errors}")
            raise GitHubGraphQLError(errors)

        return data["data"]
