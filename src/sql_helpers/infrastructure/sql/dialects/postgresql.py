"""
PostgreSQL-specific SQL dialect implementation.

Provides the INSERT statement header template consumed by the insert
generator. Identifiers in the header are quoted by the formatting engine's
``~`` filter.
"""


class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"

    # $1~ is the table as an SQL name, $2^ the pre-rendered column list
    insert_template = "insert into $1~($2^) values"

    def insert_header(self, capitalize: bool = False) -> str:
        """
        Return the INSERT header template.

        Args:
            capitalize: Upper-case the keywords. Only the template is changed,
                so text interpolated into it later keeps its case.

        Returns:
            Template with ``$1`` for the table and ``$2`` for the column list
        """
        if capitalize:
            return self.insert_template.upper()
        return self.insert_template
