"""
一覧取得で共通のクエリ組み立て

- キーワード検索: 指定カラムのいずれかに部分一致（大文字小文字を区別、OR結合）
- 並び順: 並び順キーワードから ORDER BY 句へ変換（不明なキーワードは既定値）
- カーソルページング: 作成日時の新しい順で、カーソル位置の次のレコードから取得
"""
from typing import Dict, List, Optional, Sequence, Type

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement


def keyword_filter(columns: Sequence, keyword: Optional[str]) -> Optional[ColumnElement]:
    """キーワードの部分一致条件（空のキーワードは条件なし）"""
    if not keyword:
        return None
    # % と _ はリテラルとして扱う
    return or_(*(column.contains(keyword, autoescape=True) for column in columns))


def resolve_order(order: Optional[str], orders: Dict[str, List], default: str = "recent") -> List:
    """並び順キーワードを ORDER BY 句のリストに変換"""
    return orders.get(order or default, orders[default])


async def fetch_cursor_window(
    db: AsyncSession,
    model: Type,
    cursor: Optional[str],
    limit: int,
    *criteria
) -> list:
    """カーソル位置のレコードを除いた次の limit 件を新しい順に取得

    カーソルが対象集合に存在しない場合は空のリストを返す。
    """
    stmt = select(model).where(*criteria)

    if cursor:
        anchor = (
            await db.execute(select(model).where(model.id == cursor, *criteria))
        ).scalar_one_or_none()
        if anchor is None:
            return []
        stmt = stmt.where(
            or_(
                model.created_at < anchor.created_at,
                and_(model.created_at == anchor.created_at, model.id < anchor.id)
            )
        )

    stmt = stmt.order_by(model.created_at.desc(), model.id.desc()).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())
