"""
コメントエンドポイントのテスト
"""
from uuid import uuid4
from httpx import AsyncClient

from app.models import Comment, ProductComment


class TestCommentEndpoints:
    """記事コメント"""

    async def test_list_without_cursor(self, async_client: AsyncClient, multiple_comments: list[Comment]):
        """カーソルなしは新しい順に既定の5件"""
        response = await async_client.get("/comment")

        assert response.status_code == 200
        result = response.json()
        assert [c["id"] for c in result] == [c.id for c in reversed(multiple_comments)][:5]
        assert set(result[0]) == {"id", "content", "createdAt"}

    async def test_list_with_cursor(self, async_client: AsyncClient, multiple_comments: list[Comment]):
        """カーソル位置を除いた次の5件"""
        newest_first = list(reversed(multiple_comments))
        cursor = newest_first[0].id

        response = await async_client.get("/comment", params={"cursor": cursor, "limit": 5})

        ids = [c["id"] for c in response.json()]
        assert ids == [c.id for c in newest_first[1:6]]
        assert cursor not in ids

    async def test_list_non_numeric_limit(self, async_client: AsyncClient, multiple_comments: list[Comment]):
        """数値でない limit は既定値"""
        response = await async_client.get("/comment", params={"limit": "many"})

        assert response.status_code == 200
        assert len(response.json()) == 5

    async def test_update_comment(self, async_client: AsyncClient, sample_comment: Comment):
        """コメント更新"""
        response = await async_client.patch(f"/comment/{sample_comment.id}", json={"content": "修正"})

        assert response.status_code == 200
        assert response.json()["content"] == "修正"

    async def test_update_comment_requires_content(self, async_client: AsyncClient, sample_comment: Comment):
        """本文なしの更新は400"""
        response = await async_client.patch(f"/comment/{sample_comment.id}", json={})

        assert response.status_code == 400

    async def test_update_comment_not_found(self, async_client: AsyncClient):
        """存在しないコメントの更新は404"""
        response = await async_client.patch(f"/comment/{uuid4()}", json={"content": "x"})

        assert response.status_code == 404
        assert response.content == b""

    async def test_delete_comment(self, async_client: AsyncClient, sample_comment: Comment):
        """コメント削除 → 一覧から消える"""
        response = await async_client.delete(f"/comment/{sample_comment.id}")
        assert response.status_code == 204

        response = await async_client.get("/comment")
        assert response.json() == []

    async def test_delete_comment_not_found(self, async_client: AsyncClient):
        """存在しないコメントの削除は404"""
        response = await async_client.delete(f"/comment/{uuid4()}")

        assert response.status_code == 404


class TestProductCommentEndpoints:
    """商品コメント"""

    async def test_list_product_comments(
        self, async_client: AsyncClient, multiple_product_comments: list[ProductComment]
    ):
        """商品コメント一覧は計算した結果を返す"""
        response = await async_client.get("/productcomment")

        assert response.status_code == 200
        expected = [c.id for c in reversed(multiple_product_comments)][:5]
        assert [c["id"] for c in response.json()] == expected

    async def test_list_product_comments_with_cursor(
        self, async_client: AsyncClient, multiple_product_comments: list[ProductComment]
    ):
        """カーソル方式"""
        newest_first = list(reversed(multiple_product_comments))

        response = await async_client.get(
            "/productcomment", params={"cursor": newest_first[4].id, "limit": 5}
        )

        assert [c["id"] for c in response.json()] == [c.id for c in newest_first[5:]]

    async def test_update_product_comment(self, async_client: AsyncClient, sample_product_comment: ProductComment):
        """商品コメント更新"""
        response = await async_client.patch(
            f"/productcomment/{sample_product_comment.id}", json={"content": "売り切れました"}
        )

        assert response.status_code == 200
        result = response.json()
        assert result["content"] == "売り切れました"
        assert result["productId"] == sample_product_comment.product_id

    async def test_delete_product_comment(self, async_client: AsyncClient, sample_product_comment: ProductComment):
        """商品コメント削除"""
        response = await async_client.delete(f"/productcomment/{sample_product_comment.id}")
        assert response.status_code == 204

        response = await async_client.delete(f"/productcomment/{sample_product_comment.id}")
        assert response.status_code == 404
