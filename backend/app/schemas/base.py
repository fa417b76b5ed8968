from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """入出力ともにcamelCaseのフィールド名を使うスキーマの基底クラス"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


def reject_null(value):
    """部分更新で明示的なnullを禁止する（未指定は許可）"""
    if value is None:
        raise ValueError("nullは指定できません")
    return value
