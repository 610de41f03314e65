import logging
from flask import request, jsonify, current_app
from database import db
from models import Prospect
from store import ProspectStore
from batch import run_batch
from conversion import convert_prospect
from reports import duplicate_report, name_duplicate_report
from exceptions import CandidateNotFound, ConversionError, ProspectNotFound, StoreUnavailable
# Note: prospect intake, CV storage and authentication live in other services.
# This app only exposes the deduplication maintenance endpoints.


def _unavailable(e):
    logging.error(f"Datastore unavailable: {e}")
    return jsonify({
        'success': False,
        'error': str(e)
    }), 503


def register_routes(app):
    @app.route('/api/prospects', methods=['GET'])
    def api_prospects():
        """Active prospects (not converted, not deleted), newest first"""
        try:
            page = request.args.get('page', 1, type=int)
            per_page = min(request.args.get('per_page', 20, type=int), 100)

            prospects = Prospect.query.filter(
                Prospect.is_converted.is_(False),
                Prospect.is_deleted.is_(False)
            ).order_by(Prospect.created_at.desc()).paginate(
                page=page, per_page=per_page, error_out=False
            )

            return jsonify({
                'success': True,
                'prospects': [p.to_dict() for p in prospects.items],
                'total': prospects.total,
                'page': prospects.page,
                'pages': prospects.pages
            })
        except Exception as e:
            return jsonify({
                'success': False,
                'error': str(e)
            }), 500

    @app.route('/api/prospects/<prospect_id>', methods=['GET'])
    def api_prospect_detail(prospect_id):
        prospect = db.session.get(Prospect, prospect_id)
        if not prospect:
            return jsonify({
                'success': False,
                'error': 'Prospect not found'
            }), 404

        return jsonify({
            'success': True,
            'prospect': prospect.to_dict()
        })

    @app.route('/api/prospects/<prospect_id>/convert', methods=['POST'])
    def api_convert_prospect(prospect_id):
        """Link a prospect to an existing candidate by hand"""
        data = request.get_json(silent=True) or {}
        candidate_id = data.get('candidate_id')
        if not candidate_id:
            return jsonify({
                'success': False,
                'error': 'candidate_id is required'
            }), 400

        store = ProspectStore(db.session)
        try:
            result = convert_prospect(store, prospect_id, candidate_id)
        except (ProspectNotFound, CandidateNotFound) as e:
            return jsonify({'success': False, 'error': str(e)}), 404
        except ConversionError as e:
            db.session.rollback()
            return jsonify({'success': False, 'error': str(e)}), 409
        except StoreUnavailable as e:
            return _unavailable(e)

        return jsonify({
            'success': True,
            'status': result.status,
            'prospect_id': result.prospect_id,
            'converted_to_id': result.candidate_id,
            'converted_at': result.converted_at.isoformat() if result.converted_at else None
        })

    @app.route('/api/maintenance/duplicates', methods=['GET'])
    def api_duplicate_report():
        try:
            report = duplicate_report(ProspectStore(db.session))
        except StoreUnavailable as e:
            return _unavailable(e)

        return jsonify({
            'success': True,
            'report': report.to_dict()
        })

    @app.route('/api/maintenance/name-duplicates', methods=['GET'])
    def api_name_duplicate_report():
        sample = request.args.get('sample', current_app.config['DEDUPE']['name_duplicate_sample'], type=int)
        try:
            report = name_duplicate_report(ProspectStore(db.session), sample=sample)
        except StoreUnavailable as e:
            return _unavailable(e)

        return jsonify({
            'success': True,
            'report': report.to_dict()
        })

    @app.route('/api/maintenance/dedupe', methods=['POST'])
    def api_run_dedupe():
        """Run the prospect cleanup batch and return its summary"""
        try:
            summary = run_batch(ProspectStore(db.session))
        except StoreUnavailable as e:
            return _unavailable(e)

        return jsonify({
            'success': True,
            'summary': summary.to_dict()
        })

    @app.route('/api/stats')
    def api_stats():
        try:
            stats = ProspectStore(db.session).counts()
        except StoreUnavailable as e:
            return _unavailable(e)

        return jsonify({
            'success': True,
            'stats': stats
        })
