"""
Medical file API Routes
Upload to object storage, listing with temporary links, deletion
"""
from flask import Blueprint, current_app, jsonify, request

from doktolib.errors import ClientInputError
from doktolib.extensions import db
from doktolib.models.base import isoformat
from doktolib.services.file_classifier import FileCategory
from doktolib.services.medical_file_service import FileUpload, MedicalFileService

medical_file_bp = Blueprint('medical_file', __name__, url_prefix='/api/v1/files')


def _file_service():
    return MedicalFileService(
        db.session,
        current_app.extensions['object_store'],
        max_file_size=current_app.config['MAX_UPLOAD_SIZE'],
        link_ttl=current_app.config['PRESIGNED_URL_TTL'],
    )


@medical_file_bp.route('/upload', methods=['POST'])
def upload_file():
    """
    Upload a medical file.
    Multipart form: patient_id, patient_name, file
    """
    patient_id = (request.form.get('patient_id') or '').strip()
    patient_name = (request.form.get('patient_name') or '').strip()

    if not patient_id or not patient_name:
        raise ClientInputError('patient_id and patient_name are required')

    file = request.files.get('file')
    if file is None or not file.filename:
        raise ClientInputError('Failed to get file from request')

    medical_file = _file_service().upload(
        patient_id, patient_name, FileUpload(filename=file.filename, stream=file.stream)
    )

    return jsonify({
        'success': True,
        'data': {
            'file_id': medical_file.id,
            'file_name': medical_file.file_name,
            'file_size': medical_file.file_size,
            's3_key': medical_file.s3_key,
            'category': medical_file.category,
            'uploaded_at': isoformat(medical_file.uploaded_at),
        },
        'message': 'File uploaded successfully'
    }), 201


@medical_file_bp.route('', methods=['GET'])
def list_files():
    """
    List medical files, newest first, each with a presigned link valid for one hour.
    Query params:
        patient_id: exact patient filter (optional)
        category: lab_results | insurance | prescription | medical_records | other (optional)
    s3_url is null when storage is not configured or signing failed.
    """
    patient_id = request.args.get('patient_id', type=str)
    category = request.args.get('category', type=str)

    if category:
        try:
            category = FileCategory.parse(category)
        except ValueError as e:
            raise ClientInputError(str(e)) from None

    files = _file_service().list_files(patient_id=patient_id, category=category or None)

    return jsonify({
        'success': True,
        'data': [f.to_dict(access_url=url) for f, url in files]
    }), 200


@medical_file_bp.route('/<file_id>', methods=['DELETE'])
def delete_file(file_id):
    """Delete the stored object (best effort) and the file metadata."""
    deleted_id = _file_service().delete(file_id)

    return jsonify({
        'success': True,
        'data': {'file_id': deleted_id},
        'message': 'File deleted successfully'
    }), 200
