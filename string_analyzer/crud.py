from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from string_analyzer import models
from string_analyzer.exceptions import StringAlreadyExistsError
from string_analyzer.schemas import StringProperties


def get_string(db: Session, sha256_hash: str) -> Optional[models.StoredString]:
    return db.query(models.StoredString).filter(models.StoredString.sha256_hash == sha256_hash).first()


def get_strings(db: Session) -> List[models.StoredString]:
    return db.query(models.StoredString).order_by(models.StoredString.pk.asc()).all()


def create_string(db: Session, value: str, props: StringProperties) -> models.StoredString:
    row = models.StoredString(
        sha256_hash=props.sha256_hash,
        value=value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        character_frequency_map=props.character_frequency_map,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent request stored the same value first
        db.rollback()
        raise StringAlreadyExistsError("String already exists in the system") from e
    db.refresh(row)
    return row


def delete_string(db: Session, sha256_hash: str) -> bool:
    row = get_string(db, sha256_hash)
    if row:
        db.delete(row)
        db.commit()
        return True
    return False
