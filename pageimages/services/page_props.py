# pageimages/services/page_props.py
# Responsibility: Persists the page image properties of a page.

from typing import Dict, Sequence

from pageimages.services.db import DBTransaction


class PagePropsRepository:
    """
    Data Access Layer for the 'page_props' table.
    Only the page image properties are touched; other properties of the page are kept.
    """

    def __init__(self, prop_names: Sequence[str], transaction=DBTransaction):
        self.prop_names = tuple(prop_names)
        self.transaction = transaction

    def replace_page_images(self, page_id: int, properties: Dict[str, str]) -> None:
        """
        Replaces the page image properties of a page in one transaction.
        Properties absent from `properties` are removed, so a previous winner never lingers.
        """
        sql_delete = "DELETE FROM page_props WHERE pp_page = %s AND pp_propname = ANY(%s)"
        sql_insert = """
            INSERT INTO page_props (pp_page, pp_propname, pp_value)
            VALUES (%s, %s, %s)
        """

        with self.transaction() as conn:
            with conn.cursor() as cur:
                cur.execute(sql_delete, (page_id, list(self.prop_names)))
                for name, value in properties.items():
                    cur.execute(sql_insert, (page_id, name, value))

    def get_page_images(self, page_id: int) -> Dict[str, str]:
        sql = "SELECT pp_propname, pp_value FROM page_props WHERE pp_page = %s AND pp_propname = ANY(%s)"
        with self.transaction() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (page_id, list(self.prop_names)))
                return {name: value for name, value in cur.fetchall()}
