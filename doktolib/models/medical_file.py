from doktolib.extensions import db
from .base import generate_id, isoformat, utcnow


class MedicalFile(db.Model):
    """
    Metadata of a file stored in the object store.

    s3_key is assigned once at upload and never changes. The temporary
    access link is not a column: it is minted for each listing response.
    """

    __tablename__ = 'medical_files'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    patient_id = db.Column(db.String(100), nullable=False, index=True)
    patient_name = db.Column(db.String(255), nullable=False)

    file_name = db.Column(db.String(255), nullable=False)  # original filename
    file_type = db.Column(db.String(120), nullable=False)  # resolved content type
    file_size = db.Column(db.BigInteger, nullable=False)
    s3_key = db.Column(db.String(500), nullable=False, unique=True)
    category = db.Column(db.String(30), nullable=False, index=True)
    uploaded_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return f"<MedicalFile {self.file_name} ({self.category}) for {self.patient_id}>"

    def to_dict(self, access_url=None):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient_name,
            'file_name': self.file_name,
            'file_type': self.file_type,
            'file_size': self.file_size,
            's3_key': self.s3_key,
            's3_url': access_url,
            'category': self.category,
            'uploaded_at': isoformat(self.uploaded_at),
        }
