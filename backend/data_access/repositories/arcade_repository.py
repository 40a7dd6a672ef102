"""
Arcade repository for the arcade catalogue table.
"""

from typing import Dict, Any, List, Optional

from .base import BaseRepository


class ArcadeRepository(BaseRepository):
    """
    Repository for arcades table operations.
    """

    def upsert(
        self,
        slug: str,
        title: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        players_label: Optional[str] = None,
        streak_label: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Insert an arcade or refresh its metadata if the slug already exists.

        The players/streak labels are only written on first insert so they can
        be edited in the database afterwards.

        Returns:
            The stored arcade row
        """
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO arcades (
                    slug, title, description, category, difficulty, players_label, streak_label
                ) VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (slug) DO UPDATE SET
                    title = EXCLUDED.title,
                    description = EXCLUDED.description,
                    category = EXCLUDED.category,
                    difficulty = EXCLUDED.difficulty,
                    updated_at = NOW()
                RETURNING id, slug, title, description, category, difficulty,
                          players_label, streak_label, created_at
            """, (slug, title, description, category, difficulty, players_label, streak_label))
            return dict(cursor.fetchone())

    def get_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        return self.fetch_one("""
            SELECT id, slug, title, description, category, difficulty,
                   players_label, streak_label, created_at
            FROM arcades
            WHERE slug = %s
        """, (slug,))

    def list_arcades(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List arcades, newest first.

        Args:
            category: Optional filter. 'uncategorized' matches rows with no
                      category; anything else is matched case-insensitively.
        """
        query = """
            SELECT slug, title, description, category, difficulty,
                   players_label, streak_label, created_at
            FROM arcades
        """
        params: List[Any] = []
        if category:
            if category.lower() == 'uncategorized':
                query += " WHERE category IS NULL OR category = ''"
            else:
                query += " WHERE LOWER(category) = LOWER(%s)"
                params.append(category)
        query += " ORDER BY created_at DESC"
        return self.fetch_all(query, params)
