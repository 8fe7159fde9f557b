import pandas as pd
from typing import List, Dict, Any, Optional
from pathlib import Path

class TopicLoader:
    """
    Read topic tables (title and optional hours) from CSV or Excel files.
    Column names are matched case-insensitively; "topic" is accepted for "title".
    """
    
    @staticmethod
    def parse_csv_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse CSV topic table. Expected columns: Title (or Topic), Hours"""
        df = pd.read_csv(file_path)
        return TopicLoader._rows_to_topics(df)
    
    @staticmethod
    def parse_excel_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse Excel topic table. Expected columns: Title (or Topic), Hours"""
        df = pd.read_excel(file_path)
        return TopicLoader._rows_to_topics(df)
    
    @staticmethod
    def _rows_to_topics(df: pd.DataFrame) -> List[Dict[str, Any]]:
        # Normalize column names
        df.columns = df.columns.astype(str).str.strip().str.lower()
        
        if "title" not in df.columns and "topic" not in df.columns:
            raise ValueError(f"Topic file needs a 'title' or 'topic' column, found: {', '.join(df.columns)}")
        
        topics = []
        for _, row in df.iterrows():
            title = row.get("title", row.get("topic"))
            
            # Skip rows with missing titles or nan values
            if pd.isna(title) or not str(title).strip():
                continue
            
            topics.append({
                "title": str(title).strip(),
                "hours": TopicLoader._parse_hours(row.get("hours"))
            })
        
        return topics
    
    @staticmethod
    def _parse_hours(value: Any) -> Optional[float]:
        """Hours as float, None when blank or unreadable so they get estimated"""
        if value is None or pd.isna(value):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    
    @staticmethod
    def auto_parse(file_path: str) -> List[Dict[str, Any]]:
        """
        Automatically detect file type and parse accordingly.
        Supports: CSV, Excel (xlsx, xls)
        """
        file_ext = Path(file_path).suffix.lower()
        
        if file_ext == ".csv":
            return TopicLoader.parse_csv_table(file_path)
        elif file_ext in [".xlsx", ".xls"]:
            return TopicLoader.parse_excel_table(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .csv or .xlsx")
